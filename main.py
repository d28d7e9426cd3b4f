import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chatbot_blocks.configs.settings import settings
from chatbot_blocks.database.database import create_tables
from chatbot_blocks.middlewares.error_handler import register_error_handlers
from chatbot_blocks.controllers import (
    block_type_router,
    chatbot_router,
    dynamic_block_router,
    item_tag_router,
    static_block_router,
    tag_router,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        await create_tables()
        logger.info("Database schema ready")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Multi-tenant API for chatbots and their static and dynamic blocks",
    version="1.0.0",
    lifespan=lifespan,
)

register_error_handlers(app)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Routers ---
app.include_router(chatbot_router, prefix=f"{settings.API_V1_PREFIX}/chatbots", tags=["Chatbots"])
app.include_router(
    static_block_router,
    prefix=f"{settings.API_V1_PREFIX}/chatbots/{{chatbot_id}}/blocks",
    tags=["Static Blocks"],
)
app.include_router(
    dynamic_block_router,
    prefix=f"{settings.API_V1_PREFIX}/chatbots/{{chatbot_id}}/blocks/dynamic",
    tags=["Dynamic Blocks"],
)
app.include_router(
    block_type_router,
    prefix=f"{settings.API_V1_PREFIX}/chatbots/{{chatbot_id}}/block-types",
    tags=["Block Types"],
)
app.include_router(
    item_tag_router,
    prefix=f"{settings.API_V1_PREFIX}/chatbots/{{chatbot_id}}/items",
    tags=["Item Tags"],
)
app.include_router(tag_router, prefix=f"{settings.API_V1_PREFIX}/tags", tags=["Tags"])


@app.get("/health")
def health():
    return {"status": "ok", "app_name": settings.APP_NAME}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=False)
