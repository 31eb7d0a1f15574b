"""
应用配置
从环境变量（或 .env 文件）读取配置
"""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用设置"""

    # 应用基础配置
    APP_NAME: str = "Hotel Reservation Service"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # 数据库配置
    DATABASE_URL: str = "sqlite:///./hotel_reservation.db"

    # JWT 配置
    SECRET_KEY: str = "hotel-reservation-secret-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # 预订取消/完成/删除时是否重新计算房间可用状态
    # 默认关闭：确认预订只会把房间置为不可用，不会自动恢复
    RESTORE_AVAILABILITY_ON_RELEASE: bool = False

    model_config = ConfigDict(env_file=".env", case_sensitive=True)


# 全局设置实例
settings = Settings()
