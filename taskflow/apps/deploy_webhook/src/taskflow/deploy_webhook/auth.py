"""Webhook 鉴权 -- 静态令牌比对

比较使用 hmac.compare_digest（常量时间）。未配置令牌时拒绝所有请求。
"""

import hmac


def _matches(candidate: str, expected: str) -> bool:
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


def verify_bearer(header_value: str | None, expected_token: str) -> bool:
    """校验 Authorization: Bearer <token>"""
    if not header_value or not expected_token:
        return False
    scheme, _, token = header_value.partition(" ")
    if scheme != "Bearer" or not token:
        return False
    return _matches(token, expected_token)


def verify_shared_secret(value: str | None, expected_token: str) -> bool:
    """校验查询参数中的共享密钥"""
    if not value or not expected_token:
        return False
    return _matches(value, expected_token)
