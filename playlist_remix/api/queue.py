from fastapi import APIRouter, Depends

from playlist_remix.pipeline import KeyedSerialQueue

from .deps import get_queue
from .schemas import QueueStateResponse

router = APIRouter()


@router.get("", response_model=QueueStateResponse)
def queue_state(queue: KeyedSerialQueue = Depends(get_queue)) -> QueueStateResponse:
    """Keys with refreshes in flight and how many tasks wait on each."""
    keys = queue.keys()
    return QueueStateResponse(
        keys=keys,
        pending={key: len(queue.pending(key)) for key in keys},
    )
