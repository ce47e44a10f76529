"""
Phone verification API endpoints.

Each flow is addressed by the ID returned when it is started. Failed
actions leave the flow where it was; the error body carries the
user-facing message.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_verification_flows

from .flow import FlowRegistry
from .models import (
    CodeSubmitRequest,
    FlowStatus,
    NameSubmitRequest,
    PhoneSubmitRequest,
    StartFlowRequest,
)

router = APIRouter()


def _finish(flows: FlowRegistry, status: FlowStatus) -> FlowStatus:
    """Completed flows hand their session over and are discarded."""
    if status.session is not None:
        flows.discard(status.flow_id)
    return status


@router.post("", response_model=FlowStatus, status_code=201)
async def start_flow(
    request: Optional[StartFlowRequest] = None,
    flows: FlowRegistry = Depends(get_verification_flows),
) -> FlowStatus:
    """
    Start a phone sign-in.

    If a phone number is given it is submitted immediately. When that
    fails the new flow is discarded and the error returned.
    """
    flow = flows.create()
    if request is None or not request.phone_number:
        return flow.status()

    try:
        return await flow.submit_phone(request.phone_number)
    except Exception:
        flows.discard(flow.id)
        raise


@router.get("/{flow_id}", response_model=FlowStatus)
async def get_flow(
    flow_id: str,
    flows: FlowRegistry = Depends(get_verification_flows),
) -> FlowStatus:
    return flows.get(flow_id).status()


@router.post("/{flow_id}/phone", response_model=FlowStatus)
async def submit_phone(
    flow_id: str,
    request: PhoneSubmitRequest,
    flows: FlowRegistry = Depends(get_verification_flows),
) -> FlowStatus:
    """Submit the phone number and have a code sent to it."""
    return await flows.get(flow_id).submit_phone(request.phone_number)


@router.post("/{flow_id}/code", response_model=FlowStatus)
async def submit_code(
    flow_id: str,
    request: CodeSubmitRequest,
    flows: FlowRegistry = Depends(get_verification_flows),
) -> FlowStatus:
    """
    Submit the 6-digit code.

    Returning users finish here; first-time users move on to name-input.
    """
    status = await flows.get(flow_id).submit_code(request.code)
    return _finish(flows, status)


@router.post("/{flow_id}/name", response_model=FlowStatus)
async def submit_name(
    flow_id: str,
    request: NameSubmitRequest,
    flows: FlowRegistry = Depends(get_verification_flows),
) -> FlowStatus:
    """Submit a first-time user's full name."""
    status = await flows.get(flow_id).submit_name(request.name)
    return _finish(flows, status)


@router.post("/{flow_id}/back", response_model=FlowStatus)
async def go_back(
    flow_id: str,
    flows: FlowRegistry = Depends(get_verification_flows),
) -> FlowStatus:
    return flows.get(flow_id).back()


@router.delete("/{flow_id}", status_code=204)
async def cancel_flow(
    flow_id: str,
    flows: FlowRegistry = Depends(get_verification_flows),
) -> None:
    """Abandon a flow. Unknown IDs are ignored."""
    flows.discard(flow_id)
