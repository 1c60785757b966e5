"""配置常量模块 -- 可通过环境变量覆盖

包含运行环境标识、监听端口、演示数据开关、CORS 与限流参数等可配置项。
"""

import os

# 服务版本标识（/health 返回）
APP_VERSION: str = os.environ.get("TASKFLOW_APP_VERSION", "1.0.16")

# /api 文档载荷中的 API 版本
API_VERSION: str = "1.0.0"

# 服务展示名称
SERVICE_NAME: str = "TaskFlow API"

DEFAULT_ENVIRONMENT: str = "development"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def get_environment() -> str:
    """获取运行环境标签（未设置时显示为 development）"""
    return os.environ.get("TASKFLOW_ENV") or DEFAULT_ENVIRONMENT


def is_development_mode() -> bool:
    """是否显式处于开发模式

    仅当 TASKFLOW_ENV 明确为 "development" 时才向客户端暴露内部错误信息，
    未设置时按生产处理。
    """
    return os.environ.get("TASKFLOW_ENV") == "development"


def get_host() -> str:
    """获取 HTTP 监听地址"""
    return os.environ.get("TASKFLOW_HOST", "0.0.0.0")


def get_port() -> int:
    """获取 HTTP 监听端口"""
    return _int_from_env("TASKFLOW_PORT", 3000)


def should_seed_demo_tasks() -> bool:
    """启动时是否写入三条演示任务"""
    return os.environ.get("TASKFLOW_SEED_DEMO_TASKS", "true").strip().lower() in _TRUE_VALUES


def get_cors_origins() -> list[str]:
    """获取 CORS 允许的来源列表（逗号分隔，默认 *）"""
    raw = os.environ.get("TASKFLOW_CORS_ORIGINS", "*")
    origins = [item.strip() for item in raw.split(",") if item.strip()]
    return origins or ["*"]


def get_rate_limit_max() -> int:
    """单个客户端在一个窗口内允许的请求数（0 表示关闭限流）"""
    return _int_from_env("TASKFLOW_RATE_LIMIT_MAX", 100)


def get_rate_limit_window_s() -> int:
    """限流窗口长度（秒）"""
    return _int_from_env("TASKFLOW_RATE_LIMIT_WINDOW_S", 15 * 60)


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default
