"""서비스 레이어에서 사용하는 오류 분류입니다. 모두 HTTPException으로 그대로 응답 코드에 매핑됩니다."""

from fastapi import HTTPException, status


class Unauthenticated(HTTPException):
    def __init__(self, detail: str = "로그인이 필요합니다."):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class SessionExpired(HTTPException):
    def __init__(self, detail: str = "세션이 만료되었습니다."):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class Forbidden(HTTPException):
    def __init__(self, detail: str = "접근 권한이 없습니다."):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class InvalidInput(HTTPException):
    def __init__(self, detail: str = "필수 입력값이 누락되었습니다."):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "대상을 찾을 수 없습니다."):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class StoreFailure(HTTPException):
    def __init__(self, detail: str = "데이터 저장소 오류가 발생했습니다."):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
