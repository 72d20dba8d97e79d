"""Button endpoints - attach, detach, settings and key events."""

from fastapi import APIRouter, status

from deckstatus.api.dependencies import EventManagerDep, RegistryDep
from deckstatus.api.models import (
    APIResponse,
    ButtonAttach,
    ButtonResponse,
    KeyUpResponse,
    SettingsUpdate,
    button_to_response,
)

router = APIRouter(prefix="/buttons", tags=["buttons"])


@router.get("", response_model=APIResponse[list[ButtonResponse]])
def list_buttons(registry: RegistryDep) -> APIResponse[list[ButtonResponse]]:
    """List all attached buttons."""
    return APIResponse(data=[button_to_response(b) for b in registry.list_buttons()])


@router.get("/{context}", response_model=APIResponse[ButtonResponse])
def get_button(context: str, registry: RegistryDep) -> APIResponse[ButtonResponse]:
    """Get a button with its latest render plan."""
    return APIResponse(data=button_to_response(registry.get(context)))


@router.post(
    "/{context}",
    response_model=APIResponse[ButtonResponse],
    status_code=status.HTTP_201_CREATED,
)
async def attach_button(
    context: str,
    body: ButtonAttach,
    registry: RegistryDep,
    event_manager: EventManagerDep,
) -> APIResponse[ButtonResponse]:
    """Attach a button (the key appeared). Starts its timer and first refresh."""
    button = await registry.attach(context, body.action, body.settings)
    await event_manager.emit_button_attached(context, body.action)
    return APIResponse(data=button_to_response(button))


@router.delete("/{context}", status_code=status.HTTP_204_NO_CONTENT)
async def detach_button(
    context: str, registry: RegistryDep, event_manager: EventManagerDep
) -> None:
    """Detach a button (the key disappeared)."""
    await registry.detach(context)
    await event_manager.emit_button_detached(context)


@router.put("/{context}/settings", response_model=APIResponse[ButtonResponse])
async def update_settings(
    context: str, body: SettingsUpdate, registry: RegistryDep
) -> APIResponse[ButtonResponse]:
    """Replace a button's settings and refresh it."""
    button = await registry.update_settings(context, body.settings)
    return APIResponse(data=button_to_response(button))


@router.post(
    "/{context}/key-down",
    response_model=APIResponse[ButtonResponse],
    status_code=status.HTTP_202_ACCEPTED,
)
async def key_down(context: str, registry: RegistryDep) -> APIResponse[ButtonResponse]:
    """Key pressed. Polling actions start a refresh."""
    await registry.key_down(context)
    return APIResponse(data=button_to_response(registry.get(context)))


@router.post("/{context}/key-up", response_model=APIResponse[KeyUpResponse])
async def key_up(context: str, registry: RegistryDep) -> APIResponse[KeyUpResponse]:
    """Key released. Returns the URL the button opened, if any."""
    url = await registry.key_up(context)
    return APIResponse(data=KeyUpResponse(url=url))


@router.post("/{context}/refresh", response_model=APIResponse[ButtonResponse])
async def refresh_button(context: str, registry: RegistryDep) -> APIResponse[ButtonResponse]:
    """Refresh a button now and wait for the cycle to finish."""
    button = await registry.refresh(context)
    return APIResponse(data=button_to_response(button))
