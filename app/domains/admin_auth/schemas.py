from pydantic import BaseModel, Field


### 관리자 로그인 요청 (공백 제거/길이 검증 외의 가공은 하지 않음)
class AdminLoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AdminUserInfo(BaseModel):
    username: str
    role: str


### 관리자 로그인 응답
class AdminLoginResponse(BaseModel):
    token: str
    user: AdminUserInfo


### 토큰에 담긴 현재 관리자 정보 응답
class AdminMeResponse(BaseModel):
    user: dict
