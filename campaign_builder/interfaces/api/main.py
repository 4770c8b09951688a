"""FastAPI 应用入口"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from campaign_builder.application.services.editor_session import EditorSessionRegistry
from campaign_builder.config import Settings, settings
from campaign_builder.domain.ports.campaign_service import CampaignServicePort
from campaign_builder.infrastructure.adapters.http_campaign_service import (
    HttpCampaignServiceAdapter,
)
from campaign_builder.infrastructure.adapters.in_memory_campaign_service import (
    InMemoryCampaignService,
)
from campaign_builder.interfaces.api.container import ApiContainer
from campaign_builder.interfaces.api.routes import campaign_editor, step_catalog


def _build_campaign_service(config: Settings) -> CampaignServicePort:
    if config.campaign_service_backend == "http":
        return HttpCampaignServiceAdapter(
            base_url=config.campaign_service_url,
            token=config.campaign_service_token or None,
            timeout=float(config.request_timeout),
        )
    return InMemoryCampaignService()


def _build_container(config: Settings) -> ApiContainer:
    return ApiContainer(
        session_registry=EditorSessionRegistry(),
        campaign_service=_build_campaign_service(config),
    )


def _get_display_host() -> str:
    """Return a host suitable for displaying in links."""
    if settings.host in {"0.0.0.0", "::"}:
        return "127.0.0.1"
    return settings.host


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    display_host = _get_display_host()
    print(f"[*] {settings.app_name} v{settings.app_version} 启动中...")
    print(f"[ENV] 环境: {settings.env}")
    print(f"[CAMPAIGN] campaign 服务: {settings.campaign_service_backend}")
    print(f"[URL] 服务地址: http://{display_host}:{settings.port}")
    print(f"[DOCS] API 文档: http://{display_host}:{settings.port}/docs")

    app.state.container = _build_container(settings)

    try:
        yield
    finally:
        print(f"[SHUTDOWN] {settings.app_name} 关闭中...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="多渠道外联 campaign 工作流编辑器",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["Health"])
async def health_check() -> JSONResponse:
    return JSONResponse(
        content={
            "status": "healthy",
            "app_name": settings.app_name,
            "version": settings.app_version,
            "env": settings.env,
        }
    )


app.include_router(step_catalog.router, prefix="/api")
app.include_router(campaign_editor.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "campaign_builder.interfaces.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )
