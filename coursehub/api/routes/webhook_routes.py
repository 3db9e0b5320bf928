# webhook_routes.py
import json
import logging
import os

from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from svix.webhooks import Webhook, WebhookVerificationError

from coursehub.models.user_model import ClerkEvent
from coursehub.services.identity_service import IdentitySyncService

router = APIRouter(tags=["webhooks"])
svc = IdentitySyncService()

SVIX_HEADERS = ("svix-id", "svix-timestamp", "svix-signature")


@router.post("/clerk")
async def clerk_webhook(request: Request):
    """
    Identity provider events. The raw body is read untouched because the
    signature is computed over the exact bytes sent.
    """
    logging.info("Incoming Clerk webhook")

    secret = os.getenv("CLERK_WEBHOOK_SECRET")
    if not secret:
        logging.error("CLERK_WEBHOOK_SECRET not configured")
        return JSONResponse(status_code=500, content={"success": False, "message": "Webhook secret not configured"})

    headers = {h: request.headers.get(h) for h in SVIX_HEADERS}
    if not all(headers.values()):
        logging.error(f"Missing Svix headers: {headers}")
        return JSONResponse(status_code=400, content={"success": False, "message": "Missing Svix headers"})

    raw = await request.body()

    try:
        payload = raw.decode("utf-8")
        Webhook(secret).verify(payload, headers)
        event = ClerkEvent.model_validate(json.loads(payload))
    except WebhookVerificationError as e:
        logging.warning(f"Webhook signature rejected: {e}")
        return JSONResponse(status_code=400, content={"success": False, "message": "Invalid signature"})
    except ValueError as e:
        return JSONResponse(status_code=400, content={"success": False, "message": str(e)})

    logging.info(f"Webhook event: {event.type}")

    try:
        status, body = await run_in_threadpool(svc.handle, event.type, event.data)
    except Exception as e:
        logging.error(f"Webhook error on {event.type}: {e}")
        return JSONResponse(status_code=500, content={"success": False, "message": str(e)})

    return JSONResponse(status_code=status, content=jsonable_encoder(body))
