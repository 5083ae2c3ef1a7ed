from fastapi import Header, HTTPException
from jose import JWTError, jwt

from litle_plugin.config import settings


def verify_token(authorization: str = Header(...)):
    try:
        scheme, token = authorization.split()
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid or missing token")
    if scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail="Invalid or missing token")
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or missing token")
