from fastapi import APIRouter

from projectcode.api.routes import flows, history, payments, pricing, subscriptions, users, utils

api_router = APIRouter()
api_router.include_router(utils.router)
api_router.include_router(flows.router)
api_router.include_router(history.router)
api_router.include_router(users.router)
api_router.include_router(subscriptions.router)
api_router.include_router(pricing.router)
api_router.include_router(payments.router)
