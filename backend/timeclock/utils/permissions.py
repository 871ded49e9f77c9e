"""Permissions 관련 공용 유틸리티 헬퍼입니다."""

ADMIN = "admin"
EMPLOYEE = "employee"


def is_admin(role: str) -> bool:
    return role == ADMIN
