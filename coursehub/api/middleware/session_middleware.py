from fastapi import Request
from fastapi.responses import JSONResponse
import logging

from coursehub.repositories.session_repository import SessionRepository
from coursehub.utils.security import seconds_until_expiry, verify_session_token

PROTECTED_PREFIXES = ("/api/user/", "/api/educator/")


async def session_middleware(request: Request, call_next):
	"""
	HTTP middleware that resolves the caller before the request is handled.
	- Only /api/user and /api/educator require a session
	- Token comes from Authorization: Bearer
	- Redis session cache first, then Clerk JWT verification (result cached)
	- Missing or invalid token answers 401
	"""

	path = request.url.path
	request.state.user_id = None

	if request.method == "OPTIONS" or not path.startswith(PROTECTED_PREFIXES):
		return await call_next(request)

	auth_header = request.headers.get("authorization")
	token = None
	if auth_header and auth_header.lower().startswith("bearer "):
		token = auth_header.split(" ", 1)[1].strip()

	if not token:
		return JSONResponse(status_code=401, content={"success": False, "message": "Missing or invalid session token"})

	try:
		sessions = SessionRepository()
		user_id = sessions.get_user_id(token)
	except Exception as e:
		logging.error(f"Error connecting to Redis in middleware: {e}")
		return JSONResponse(status_code=500, content={"success": False, "message": "Session store unavailable"})

	if not user_id:
		claims = verify_session_token(token)
		if not claims:
			return JSONResponse(status_code=401, content={"success": False, "message": "Session invalid or expired"})
		user_id = claims["sub"]
		try:
			sessions.cache(token, user_id, seconds_until_expiry(claims))
		except Exception as e:
			logging.warning(f"[session] cache write skipped: {e}")

	request.state.user_id = user_id

	return await call_next(request)
