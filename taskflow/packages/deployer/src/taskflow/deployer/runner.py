"""命令执行器

CommandRunner 是部署流程对外部命令的唯一依赖点，测试中以假实现替换。
"""

import asyncio
from typing import Protocol

import structlog

from .models import CommandResult

log = structlog.get_logger()


class CommandRunner(Protocol):
    """外部命令执行接口"""

    async def run(self, argv: list[str], cwd: str | None = None) -> CommandResult:
        """执行命令并等待结束"""
        ...


class SubprocessRunner:
    """基于 asyncio 子进程的命令执行器（不经过 shell）"""

    async def run(self, argv: list[str], cwd: str | None = None) -> CommandResult:
        """执行命令

        Raises:
            OSError: 可执行文件不存在或工作目录不可用
        """
        log.debug("command_started", argv=argv, cwd=cwd)
        process = await asyncio.create_subprocess_exec(
            *argv,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate()
        return CommandResult(
            returncode=process.returncode if process.returncode is not None else -1,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )
