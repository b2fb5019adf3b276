from src.hrms.hrms.main import create_app, run

if __name__ == "__main__":
    run()
else:
    app = create_app()
