"""logging_config 测试

测试内容：
1. 敏感字段掩码（顶层与一层嵌套）
2. setup_logging 后渲染输出不含令牌明文
3. uvicorn 访问日志被摘除，不与 request_completed 重复
"""

import json
import logging

import structlog
from taskflow.core.logging_config import REDACTED, redact_secrets, setup_logging


class TestRedactSecrets:
    def test_top_level_keys_masked(self):
        event = redact_secrets(
            None,
            "info",
            {"event": "deploy_auth", "token": "abc", "Authorization": "Bearer abc", "sha": "1234"},
        )
        assert event["token"] == REDACTED
        assert event["Authorization"] == REDACTED
        assert event["sha"] == "1234"
        assert event["event"] == "deploy_auth"

    def test_suffix_match(self):
        event = redact_secrets(None, "info", {"event": "x", "deploy_token": "abc", "tokens_left": 3})
        assert event["deploy_token"] == REDACTED
        assert event["tokens_left"] == 3

    def test_nested_headers_masked(self):
        event = redact_secrets(
            None,
            "info",
            {"event": "x", "headers": {"authorization": "Bearer abc", "accept": "*/*"}},
        )
        assert event["headers"] == {"authorization": REDACTED, "accept": "*/*"}


class TestSetupLogging:
    def test_rendered_output_has_no_secret(self, monkeypatch, capsys):
        monkeypatch.setenv("TASKFLOW_LOG_FORMAT", "json")
        setup_logging()

        structlog.get_logger("test").info(
            "deploy_request_seen",
            token="s3cret-value",
            headers={"Authorization": "Bearer s3cret-value"},
        )

        err = capsys.readouterr().err
        assert "s3cret-value" not in err
        line = json.loads(err.strip().splitlines()[-1])
        assert line["event"] == "deploy_request_seen"
        assert line["token"] == REDACTED
        assert line["headers"]["Authorization"] == REDACTED

    def test_uvicorn_access_log_unhooked(self, monkeypatch, capsys):
        monkeypatch.setenv("TASKFLOW_LOG_FORMAT", "json")
        setup_logging()

        access = logging.getLogger("uvicorn.access")
        assert access.propagate is False
        assert access.handlers == []

        access.info('127.0.0.1:5000 - "GET /health HTTP/1.1" 200')
        assert "GET /health" not in capsys.readouterr().err
