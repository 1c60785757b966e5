"""服务概览与 API 文档路由

GET /    : 服务概览（任务统计、运行时长、环境）
GET /api : 静态 API 文档
"""

from fastapi import APIRouter, Depends
from taskflow.core.config import API_VERSION, SERVICE_NAME, get_environment
from taskflow.core.store import TaskStore

from ..deps import get_health_reporter, get_task_store
from ..services.health_reporter import HealthReporter

router = APIRouter()

API_ENDPOINTS: list[str] = [
    "GET /api/tasks - Get all tasks",
    "GET /api/tasks/:id - Get task by ID",
    "POST /api/tasks - Create new task",
    "PUT /api/tasks/:id - Update task",
    "DELETE /api/tasks/:id - Delete task",
    "GET /health - Health check",
    "GET /api - This documentation",
]

API_EXAMPLES: dict[str, str] = {
    "create_task": (
        'POST /api/tasks with {"title": "My Task", "description": "Task details", '
        '"priority": "high"}'
    ),
    "update_task": 'PUT /api/tasks/1 with {"status": "completed"}',
    "filter_tasks": "GET /api/tasks?status=completed&priority=high",
}


@router.get("/")
async def overview(
    store: TaskStore = Depends(get_task_store),
    reporter: HealthReporter = Depends(get_health_reporter),
):
    """服务概览"""
    summary = store.summary()
    return {
        "name": SERVICE_NAME,
        "stats": {
            "total": summary.total,
            "completed": summary.completed,
            "inProgress": summary.in_progress,
            "pending": summary.pending,
        },
        "uptime": int(reporter.uptime_s()),
        "environment": get_environment(),
    }


@router.get("/api")
async def api_docs():
    """静态 API 文档"""
    return {
        "name": SERVICE_NAME,
        "version": API_VERSION,
        "description": "A comprehensive task management API",
        "endpoints": API_ENDPOINTS,
        "example_usage": API_EXAMPLES,
    }
