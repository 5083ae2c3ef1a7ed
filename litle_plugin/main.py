import logging

from fastapi import FastAPI

from litle_plugin.config import settings
from litle_plugin.database import Base, engine
from litle_plugin.error_handlers import register_exception_handlers
from litle_plugin.routes import router

logging.basicConfig(level=settings.LOG_LEVEL)

app = FastAPI(title=settings.PROJECT_NAME)

register_exception_handlers(app)

app.include_router(router)

Base.metadata.create_all(bind=engine)
