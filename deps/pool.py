from fastapi import Request

from app.pool.service import PoolService


def get_pool(request: Request) -> PoolService:
    return request.app.state.pool
