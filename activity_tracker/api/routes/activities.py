"""Activity Routes — HTTP entry points for the activity store operations.

Invariants:
    - Caller-scoped routes (/me, POST "") act on the X-Caller-Identity principal only
    - Read routes take an explicit target identity in the path
    - Domain errors propagate as ActivityTrackerError → global handler (400/404/409)
    - Every mutation returns {"message": <confirmation>}

Design Decisions:
    - Thin routes: one store call each, no business logic here
    - /me/* routes declared before /{identity}/* so "me" is never read as a target
"""

from fastapi import APIRouter, Depends, status

from activity_tracker.api.dependencies import (
    get_activity_store, get_caller_identity, get_current_height,
)
from activity_tracker.core.domain_types import BlockHeight, Identity
from activity_tracker.schemas.activity import (
    ActivityAssign, ActivityCreate, ActivityDetailsResponse, ActivityUpdate,
    CompletionResponse, DeadlineCreate, DeadlineResponse, ExistenceResponse,
    MessageResponse, PriorityCreate, PriorityResponse,
)
from activity_tracker.services.activity_store import ActivityStore

router = APIRouter(prefix="/api/v1/activities", tags=["activities"])


# ─── Caller-scoped mutations ────────────────────────────────────

@router.post(
    "", response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_activity(
    body: ActivityCreate,
    caller: Identity = Depends(get_caller_identity),
    store: ActivityStore = Depends(get_activity_store),
):
    """Register the caller's single activity."""
    return MessageResponse(
        message=await store.register_activity(caller, body.description),
    )


@router.post(
    "/assignments", response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def assign_activity(
    body: ActivityAssign,
    store: ActivityStore = Depends(get_activity_store),
):
    """Create an activity for another identity (any caller may assign)."""
    return MessageResponse(
        message=await store.assign_activity(
            Identity(body.recipient), body.description,
        ),
    )


@router.put("/me", response_model=MessageResponse)
async def modify_activity(
    body: ActivityUpdate,
    caller: Identity = Depends(get_caller_identity),
    store: ActivityStore = Depends(get_activity_store),
):
    return MessageResponse(
        message=await store.modify_activity(
            caller, body.description, body.completed,
        ),
    )


@router.delete("/me", response_model=MessageResponse)
async def cancel_activity(
    caller: Identity = Depends(get_caller_identity),
    store: ActivityStore = Depends(get_activity_store),
):
    """Delete the caller's activity. Priority/deadline entries are left in place."""
    return MessageResponse(message=await store.cancel_activity(caller))


@router.put("/me/deadline", response_model=MessageResponse)
async def establish_deadline(
    body: DeadlineCreate,
    caller: Identity = Depends(get_caller_identity),
    current_height: BlockHeight = Depends(get_current_height),
    store: ActivityStore = Depends(get_activity_store),
):
    return MessageResponse(
        message=await store.establish_deadline(
            caller, body.blocks_until_due, current_height,
        ),
    )


@router.put("/me/priority", response_model=MessageResponse)
async def assign_priority(
    body: PriorityCreate,
    caller: Identity = Depends(get_caller_identity),
    store: ActivityStore = Depends(get_activity_store),
):
    return MessageResponse(
        message=await store.assign_priority(caller, body.level),
    )


@router.get("/me/existence", response_model=ExistenceResponse)
async def check_activity_existence(
    caller: Identity = Depends(get_caller_identity),
    store: ActivityStore = Depends(get_activity_store),
):
    """Never 404s: absence is reported as {exists: false, ...}."""
    return ExistenceResponse.from_record(
        await store.check_activity_existence(caller),
    )


# ─── Reads by target identity ───────────────────────────────────

@router.get("/{identity}", response_model=ActivityDetailsResponse)
async def get_activity_details(
    identity: str, store: ActivityStore = Depends(get_activity_store),
):
    target = Identity(identity)
    return ActivityDetailsResponse.from_record(
        target, await store.get_activity_details(target),
    )


@router.get("/{identity}/completion", response_model=CompletionResponse)
async def verify_activity_completion(
    identity: str, store: ActivityStore = Depends(get_activity_store),
):
    target = Identity(identity)
    return CompletionResponse(
        identity=target,
        completed=await store.verify_activity_completion(target),
    )


@router.get("/{identity}/priority", response_model=PriorityResponse)
async def get_activity_priority(
    identity: str, store: ActivityStore = Depends(get_activity_store),
):
    target = Identity(identity)
    return PriorityResponse.from_record(
        target, await store.get_activity_priority(target),
    )


@router.get("/{identity}/deadline", response_model=DeadlineResponse)
async def get_activity_deadline(
    identity: str, store: ActivityStore = Depends(get_activity_store),
):
    target = Identity(identity)
    return DeadlineResponse.from_record(
        target, await store.get_activity_deadline(target),
    )
