"""任务路由

GET    /api/tasks            任务列表，支持 status / priority 精确筛选
GET    /api/tasks/{task_id}  任务详情
POST   /api/tasks            创建任务（title 必填）
PUT    /api/tasks/{task_id}  部分更新任务
DELETE /api/tasks/{task_id}  删除任务

所有响应使用统一信封 {success, data?, message?, total?}。
Store 的"不存在"以 None 返回，在此层转换为 404。
"""

import re
from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends, Query
from pydantic import BaseModel
from starlette.responses import JSONResponse
from taskflow.core.exceptions import TaskValidationError
from taskflow.core.models import TaskCreate, TaskUpdate
from taskflow.core.store import TaskStore

from ..deps import get_task_store

log = structlog.get_logger()

router = APIRouter()

TASK_NOT_FOUND_MESSAGE = "Task not found"
TASK_DELETED_MESSAGE = "Task deleted successfully"

# 取路径参数开头的整数部分："7" / " 7" / "7abc" -> 7，"0x1f" 按十六进制 -> 31
_LEADING_INT = re.compile(r"^\s*(?P<sign>[+-]?)(?:0[xX](?P<hex>[0-9a-fA-F]+)|(?P<dec>\d+))")


class Envelope(BaseModel):
    """统一响应信封"""

    success: bool
    data: Any = None
    message: str | None = None
    total: int | None = None


def envelope_response(status_code: int = 200, **fields: Any) -> JSONResponse:
    """构造信封响应，未设置的可选字段不输出"""
    content = Envelope(**fields).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=content)


def task_not_found() -> JSONResponse:
    return envelope_response(404, success=False, message=TASK_NOT_FOUND_MESSAGE)


def parse_task_id(raw: str) -> int | None:
    """解析路径中的任务 id，不含前导整数时返回 None"""
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    if match["hex"] is not None:
        value = int(match["hex"], 16)
    else:
        value = int(match["dec"])
    return -value if match["sign"] == "-" else value


@router.get("/api/tasks")
async def list_tasks(
    status: str | None = Query(default=None, description="按状态筛选"),
    priority: str | None = Query(default=None, description="按优先级筛选"),
    store: TaskStore = Depends(get_task_store),
):
    """查询任务列表，空字符串筛选条件视同未提供"""
    tasks = store.list_tasks(status=status or None, priority=priority or None)
    return envelope_response(
        success=True,
        data=[task.to_payload() for task in tasks],
        total=len(tasks),
    )


@router.get("/api/tasks/{task_id}")
async def get_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    """查询任务详情"""
    parsed_id = parse_task_id(task_id)
    task = store.get_task(parsed_id) if parsed_id is not None else None
    if task is None:
        return task_not_found()
    return envelope_response(success=True, data=task.to_payload())


@router.post("/api/tasks")
async def create_task(
    body: TaskCreate | None = Body(default=None),
    store: TaskStore = Depends(get_task_store),
):
    """创建任务

    - 成功返回 201
    - title 缺失或为空返回 400
    """
    payload = body or TaskCreate()
    try:
        task = store.create_task(
            payload.title,
            description=payload.description,
            priority=payload.priority,
        )
    except TaskValidationError as e:
        log.info("task_create_rejected", reason=e.message)
        return envelope_response(400, success=False, message=e.message)

    return envelope_response(201, success=True, data=task.to_payload())


@router.put("/api/tasks/{task_id}")
async def update_task(
    task_id: str,
    body: TaskUpdate | None = Body(default=None),
    store: TaskStore = Depends(get_task_store),
):
    """部分更新任务，字段写入规则见 UPDATE_FIELD_POLICIES"""
    parsed_id = parse_task_id(task_id)
    if parsed_id is None:
        return task_not_found()

    task = store.update_task(parsed_id, body or TaskUpdate())
    if task is None:
        return task_not_found()
    return envelope_response(success=True, data=task.to_payload())


@router.delete("/api/tasks/{task_id}")
async def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    """删除任务并返回被删除的记录"""
    parsed_id = parse_task_id(task_id)
    task = store.delete_task(parsed_id) if parsed_id is not None else None
    if task is None:
        return task_not_found()
    return envelope_response(
        success=True,
        data=task.to_payload(),
        message=TASK_DELETED_MESSAGE,
    )
