"""Text command endpoint: the seam a chat adapter talks to."""

from fastapi import APIRouter, Depends

from tradesim.api.deps import get_command_router
from tradesim.api.schemas import CommandRequest, CommandResponse
from tradesim.commands import CommandRouter, UserProfile

router = APIRouter(prefix="/commands", tags=["commands"])


@router.post("", response_model=CommandResponse)
def run_command(
    data: CommandRequest,
    commands: CommandRouter = Depends(get_command_router),
) -> CommandResponse:
    """Execute one chat command and return the reply text."""
    profile = UserProfile(
        username=data.username,
        first_name=data.first_name,
        last_name=data.last_name,
    )
    return CommandResponse(reply=commands.handle(data.user_id, data.text, profile))
