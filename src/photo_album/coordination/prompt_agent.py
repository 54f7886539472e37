"""Interactive Prompt Agent: collects one image's rotation choice and caption.

Each image gets its own agent thread. The worker talks to it over a pair of
queues, one request and one response per question, so the worker can do
other waiting between asking for the rotation and asking for the caption.
"""

import queue
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core import PromptProtocolError, RotationChoice, get_logger, parse_rotation_answer
from ..core.protocols import ConsoleProtocol

ROTATION_QUESTION = (
    "Rotate the photo clockwise(1), counter-clockwise(2), or not rotate at all(3)?"
)
CAPTION_QUESTION = "What's the caption for this photo?"

ROTATION = "rotation"
CAPTION = "caption"


class PromptState(Enum):
    """States of one image's prompt exchange."""

    AWAIT_ROTATION_REQUEST = "await_rotation_request"
    AWAITING_ROTATION_ANSWER = "awaiting_rotation_answer"
    AWAIT_CAPTION_REQUEST = "await_caption_request"
    AWAITING_CAPTION_ANSWER = "awaiting_caption_answer"
    DONE = "done"


_ON_REQUEST = {
    ROTATION: (PromptState.AWAIT_ROTATION_REQUEST, PromptState.AWAITING_ROTATION_ANSWER),
    CAPTION: (PromptState.AWAIT_CAPTION_REQUEST, PromptState.AWAITING_CAPTION_ANSWER),
}

_ON_ANSWER = {
    PromptState.AWAITING_ROTATION_ANSWER: PromptState.AWAIT_CAPTION_REQUEST,
    PromptState.AWAITING_CAPTION_ANSWER: PromptState.DONE,
}

_QUESTIONS = {ROTATION: ROTATION_QUESTION, CAPTION: CAPTION_QUESTION}


class PromptSession:
    """Rotation first, then caption, then done."""

    def __init__(self) -> None:
        self.state = PromptState.AWAIT_ROTATION_REQUEST

    @property
    def done(self) -> bool:
        return self.state is PromptState.DONE

    def request(self, kind: str) -> str:
        """Accept a request and return the question to put to the user."""
        if kind not in _ON_REQUEST:
            raise PromptProtocolError(f"unknown prompt request: {kind!r}")
        required, following = _ON_REQUEST[kind]
        if self.state is not required:
            raise PromptProtocolError(
                f"{kind} requested while {self.state.value}"
            )
        self.state = following
        return _QUESTIONS[kind]

    def answered(self) -> None:
        if self.state not in _ON_ANSWER:
            raise PromptProtocolError(f"no question pending while {self.state.value}")
        self.state = _ON_ANSWER[self.state]


@dataclass
class PromptReply:
    """One response sent from the agent back to its worker."""

    kind: str
    answer: str = ""
    error: Optional[str] = None
    protocol_error: bool = False


class PromptAgent:
    """
    Prompt agent for a single image.

    Worker side: `ask_rotation()` then `ask_caption()`, each a blocking
    request/response round trip. Agent side (own thread): block on a
    request, ask the user, send the answer back verbatim.
    """

    def __init__(
        self,
        index: int,
        console: ConsoleProtocol,
        answer_limit: int = 50,
        poll_interval: float = 0.1,
    ):
        self.index = index
        self.answer_limit = answer_limit
        self.session = PromptSession()
        self._console = console
        self._poll_interval = poll_interval
        self._requests: "queue.Queue[str]" = queue.Queue()
        self._responses: "queue.Queue[PromptReply]" = queue.Queue()
        self._thread = threading.Thread(
            target=self._serve, name=f"prompt-agent-{index}", daemon=True
        )
        self._logger = get_logger(f"photo-album.prompt-{index}")

    def start(self) -> "PromptAgent":
        self._thread.start()
        return self

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def join(self, timeout: Optional[float] = None) -> None:
        self._thread.join(timeout)

    # -- agent side ---------------------------------------------------------

    def _serve(self) -> None:
        while not self.session.done:
            kind = self._requests.get()
            try:
                question = self.session.request(kind)
            except PromptProtocolError as e:
                self._responses.put(PromptReply(kind, error=str(e), protocol_error=True))
                continue

            reply = PromptReply(kind)
            try:
                reply.answer = self._console.ask(question)
            except (EOFError, OSError) as e:
                self._logger.error(f"Could not read {kind} answer: {e}")
                reply.error = str(e)
            else:
                if len(reply.answer) + 1 >= self.answer_limit:
                    self._logger.warning(
                        f"{kind} answer is longer than {self.answer_limit - 2} characters"
                    )
            self.session.answered()
            self._responses.put(reply)

    # -- worker side --------------------------------------------------------

    def _round_trip(self, kind: str) -> PromptReply:
        self._requests.put(kind)
        while True:
            try:
                return self._responses.get(timeout=self._poll_interval)
            except queue.Empty:
                if self._thread.is_alive():
                    continue
            try:
                return self._responses.get_nowait()
            except queue.Empty:
                return PromptReply(kind, error="prompt agent is not running")

    def ask_rotation(self) -> RotationChoice:
        """
        Ask which way to rotate. Read failures fall back to no rotation.

        Raises:
            PromptProtocolError: if asked out of order.
        """
        reply = self._round_trip(ROTATION)
        if reply.protocol_error:
            raise PromptProtocolError(reply.error)
        if reply.error:
            self._logger.error(f"No rotation answer ({reply.error}), not rotating")
            return RotationChoice.NONE
        return parse_rotation_answer(reply.answer)

    def ask_caption(self) -> str:
        """Ask for the caption. Read failures fall back to an empty caption."""
        reply = self._round_trip(CAPTION)
        if reply.protocol_error:
            raise PromptProtocolError(reply.error)
        if reply.error:
            self._logger.error(f"No caption answer ({reply.error}), using empty caption")
            return ""
        return reply.answer
