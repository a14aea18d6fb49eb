from starlette.requests import Request

TRUSTED_PROXIES = ("127.0.0.1", "172.20.0.1")


async def get_real_ip(request: Request) -> str:
    client_host = request.client.host if request.client else "unknown"
    if "x-forwarded-for" in request.headers and client_host in TRUSTED_PROXIES:
        return request.headers["x-forwarded-for"].split(",")[0].strip()
    return client_host
