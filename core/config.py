"""
配置文件 - 项目配置管理
"""
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_DEFAULT_FEATURES_DB = Path(__file__).resolve().parents[1] / "infrastructure" / "data" / "route_guide_db.json"


class GrpcTlsSettings(BaseModel):
    enabled: bool = False
    cert: Optional[str] = None
    key: Optional[str] = None
    ca: Optional[str] = None


class GrpcSettings(BaseModel):
    enabled: bool = True
    host: str = "0.0.0.0"
    port: int = 50051
    # This maps to GRPC option grpc.max_concurrent_streams
    max_concurrent_streams: int = 100
    # Seconds in-flight RPCs get to finish on shutdown
    shutdown_grace_seconds: float = 5.0
    tls: GrpcTlsSettings = Field(default_factory=GrpcTlsSettings)


class RouteGuideSettings(BaseModel):
    features_db_path: str = str(_DEFAULT_FEATURES_DB)

    @field_validator("features_db_path")
    @classmethod
    def _expand_path(cls, v: str) -> str:
        return str(Path(v).expanduser())


class Settings(BaseSettings):
    """项目配置"""

    # 基础配置
    PROJECT_NAME: str = Field(default="Route Guide")
    VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=True)
    ENVIRONMENT: str = Field(default="development")
    # Level for grpcio's own stdlib loggers
    GRPC_LOG_LEVEL: str = Field(default="WARNING")

    # gRPC settings
    grpc: GrpcSettings = Field(default_factory=GrpcSettings)

    # 路线指南数据源
    route_guide: RouteGuideSettings = Field(default_factory=RouteGuideSettings)

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )


settings = Settings()
