"""
酒店预订服务主应用入口
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from hotel_reservation import __version__
from hotel_reservation.config import settings
from hotel_reservation.database import SessionLocal, init_db
from hotel_reservation.routers import (
    auth, customers, rooms, reservations, payments, catalog,
    employees, reports, audit_logs, schema, roles
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理：建表并准备默认角色"""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    init_db()

    from hotel_reservation.services.permission_service import PermissionService
    seed_db = SessionLocal()
    try:
        PermissionService(seed_db).seed_default_roles()
    finally:
        seed_db.close()

    logger.info(f"{settings.APP_NAME} started")
    yield


# 创建应用
app = FastAPI(
    title=settings.APP_NAME,
    description="酒店预订数据服务：客人、房间、预订、支付与附加服务",
    version=__version__,
    debug=settings.DEBUG,
    lifespan=lifespan
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册路由
app.include_router(auth.router)
app.include_router(customers.router)
app.include_router(rooms.router)
app.include_router(reservations.router)
app.include_router(payments.router)
app.include_router(catalog.router)
app.include_router(employees.router)
app.include_router(reports.router)
app.include_router(audit_logs.router)
app.include_router(schema.router)
app.include_router(roles.router)


@app.get("/")
def root():
    """根路径"""
    return {
        "name": settings.APP_NAME,
        "version": __version__,
    }


@app.get("/health")
def health_check():
    """健康检查"""
    return {"status": "healthy"}
