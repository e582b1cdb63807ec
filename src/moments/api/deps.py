from fastapi import Request

from moments.services.moment import MomentService


async def get_moment_service(request: Request) -> MomentService:
    return request.app.state.moment_service
