from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def envelope(message: str, data=None, *, status_code: int = 200, total: int | None = None) -> JSONResponse:
    content: dict = {"success": True, "message": message}
    if data is not None:
        content["data"] = data
    if total is not None:
        content["total"] = total
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))
