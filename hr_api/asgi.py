from .main import create_app

# uvicorn hr_api.asgi:app
app = create_app()
