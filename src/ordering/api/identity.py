"""Current-customer resolution for the Ordering API.

Authentication lives in an upstream collaborator that verifies the caller's
token and forwards the resolved customer id in the ``X-Customer-Id`` header.
The id is handed to the domain as an explicit parameter.
"""

from fastapi import Header, HTTPException


def current_customer(x_customer_id: str = Header(default="")) -> str:
    customer_id = x_customer_id.strip()
    if not customer_id:
        raise HTTPException(status_code=401, detail="Missing customer identity")
    return customer_id
