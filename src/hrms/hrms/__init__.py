"""HRMS record backend.

Feature modules (storage, records, users, realtime) with a thin Flask
controller layer on top of service/store layers.
"""
