from fastapi import FastAPI
from . import health, repository

def register_routes(app: FastAPI):
    app.include_router(health.router)
    app.include_router(repository.router)
