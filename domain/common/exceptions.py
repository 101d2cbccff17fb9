"""领域层业务异常定义，供领域与基础设施使用。

gRPC 层（grpc_app）仅负责把这些异常映射为状态码，领域层不反向依赖传输层。
"""
from __future__ import annotations

from typing import Optional
from shared.codes import BusinessCode


class BusinessException(Exception):
    """业务异常基类"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)


class InvalidCoordinateException(BusinessException):
    def __init__(self, field: str, value: int):
        super().__init__(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message=f"Coordinate {field}={value} is out of range",
            error_type="InvalidCoordinate",
            details={field: value},
            field=field,
        )


class FeatureDatabaseException(BusinessException):
    def __init__(self, path: str, reason: str):
        super().__init__(
            code=BusinessCode.DATA_SOURCE_ERROR,
            message=f"Cannot load feature database: {reason}",
            error_type="FeatureDatabaseError",
            details={"path": path},
        )
