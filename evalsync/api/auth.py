from evalsync.api.client import ApiClient, decode_json
from evalsync.schemas.auth import AuthResponse, LoginRequest, RegisterRequest


async def login(http: ApiClient, payload: LoginRequest) -> AuthResponse:
    r = await http.post("/auth/login", json=payload.model_dump())
    return AuthResponse.model_validate(decode_json(r))


async def register(http: ApiClient, payload: RegisterRequest) -> AuthResponse:
    r = await http.post("/auth/register", json=payload.model_dump())
    return AuthResponse.model_validate(decode_json(r))
