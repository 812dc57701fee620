"""Generation orchestration: topic → descriptions → images → published gallery.

:func:`submit_topic` drives one generation cycle. It is a generator that
yields the session state after every observable change (progress ticks,
descriptions received, each image finished, results published), so the
Gradio handler can stream updates to the browser.

Ordering guarantees
-------------------
- The description call always finishes before any image call is issued.
- Image calls are issued in description order. By default they run one at
  a time; with ``parallel_image_requests`` they run on a bounded thread
  pool. Either way results are stored by index, progress is counted only in
  the orchestrating thread, and the filtered result set is published once
  after every call has settled.

Failure policy
--------------
- Description failure (exception or empty list) ends the cycle with
  :data:`GENERATION_FAILED_MESSAGE`; no image call is made.
- Image failure (exception, empty or undecodable payload) records ``""`` for that index
  and the batch continues. If every image fails the cycle ends with an
  empty gallery and the same generic message.
"""

import logging
import time
from collections.abc import Callable, Iterator
from concurrent.futures import ThreadPoolExecutor, as_completed, wait

from lawmemes.core.config import MISSING_CREDENTIAL_MESSAGE, LawMemesConfig, config

from .media import decode_image
from .models import GENERATION_FAILED_MESSAGE, UIState
from .state import (
    begin_generation,
    fail_generation,
    publish_results,
    record_descriptions,
    set_progress,
)

logger = logging.getLogger(__name__)


class DescriptionGenerationError(RuntimeError):
    """The description step produced no usable descriptions."""


class ImageGenerationError(RuntimeError):
    """A single image call produced no image."""


def should_submit(topic: str | None, state: UIState) -> bool:
    """Decide whether a confirm gesture starts a new cycle.

    Empty or whitespace-only topics and submissions while a cycle is
    already loading are ignored.
    """
    if not topic or not topic.strip():
        return False
    if state.generation.is_loading:
        logger.info("Ignoring submission while a generation is in progress")
        return False
    return True


def ramp_toward_checkpoint(progress: float, checkpoint: float) -> float:
    """Advance the waiting animation one tick, slowing near the checkpoint."""
    increment = max(0.5, (checkpoint - progress) / 10)
    return min(float(checkpoint), progress + increment)


def progress_after(completed: int, total: int, checkpoint: float) -> float:
    """Progress once ``completed`` of ``total`` image calls have settled."""
    if total <= 0:
        return 100.0
    return checkpoint + (100.0 - checkpoint) * completed / total


def submit_topic(
    topic: str,
    state: UIState,
    settings: LawMemesConfig | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Iterator[UIState]:
    """Run one generation cycle for ``topic``.

    Nothing is yielded (and nothing changes) when :func:`should_submit`
    rejects the submission.

    Args:
        topic: Free text supplied by the user
        state: Initialized UI state
        settings: Configuration to use (default: global config)
        sleep: Delay function used before revealing results

    Yields:
        The updated state after each observable transition
    """
    settings = settings or config

    if not should_submit(topic, state):
        return

    if state.client is None:
        message = state.credential_error or MISSING_CREDENTIAL_MESSAGE
        logger.error("Refusing to submit: Gemini client is not configured")
        fail_generation(state, message)
        yield state
        return

    topic = topic.strip()
    logger.info(f"Starting generation for topic: {topic[:50]}")
    begin_generation(state, topic)
    yield state

    checkpoint = settings.progress_checkpoint

    try:
        descriptions = yield from _await_descriptions(state, topic, settings)
    except DescriptionGenerationError as e:
        logger.error(f"Error generating images: {e}")
        fail_generation(state, GENERATION_FAILED_MESSAGE)
        yield state
        return

    logger.info(f"Generated meme descriptions: {descriptions}")
    record_descriptions(state, descriptions, checkpoint)
    yield state

    images = [""] * len(descriptions)
    completed = 0
    for index, image in _iter_image_results(state.client, descriptions, settings):
        images[index] = image
        completed += 1
        set_progress(state, progress_after(completed, len(descriptions), checkpoint))
        yield state

    set_progress(state, 100.0)
    yield state

    if settings.result_reveal_delay > 0:
        sleep(settings.result_reveal_delay)

    error = None if any(images) else GENERATION_FAILED_MESSAGE
    if error:
        logger.error("Every image request failed; showing an empty gallery")
    publish_results(state, images, error=error)
    yield state


def _await_descriptions(
    state: UIState, topic: str, settings: LawMemesConfig
) -> Iterator[UIState]:
    """Request descriptions while ramping the progress bar.

    Returns (via ``yield from``) the list of descriptions.

    Raises:
        DescriptionGenerationError: If the call raises or returns nothing
    """
    client = state.client
    checkpoint = settings.progress_checkpoint

    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="lawmemes-describe") as executor:
        future = executor.submit(
            client.generate_meme_descriptions, topic, settings.max_descriptions
        )
        while True:
            done, _ = wait([future], timeout=settings.progress_tick_seconds)
            if done:
                break
            set_progress(state, ramp_toward_checkpoint(state.generation.progress, checkpoint))
            yield state

        try:
            descriptions = future.result()
        except Exception as e:
            raise DescriptionGenerationError(f"Description request failed: {e}") from e

    if not descriptions:
        raise DescriptionGenerationError("Failed to generate meme descriptions")
    return list(descriptions)[: settings.max_descriptions]


def _generate_one(client, index: int, description: str) -> str:
    """Run one image call, isolating its failure.

    Returns:
        Base64 payload, or ``""`` if the call failed
    """
    try:
        image = client.generate_image(description)
        if not image:
            raise ImageGenerationError(f"No image returned for description {index + 1}")
        decode_image(image)
        return image
    except Exception as e:
        logger.warning(f"Error with image {index + 1}: {e}")
        return ""


def _iter_image_results(
    client, descriptions: list[str], settings: LawMemesConfig
) -> Iterator[tuple[int, str]]:
    """Yield ``(index, image)`` for every description as each call settles."""
    if not settings.parallel_image_requests or len(descriptions) < 2:
        for index, description in enumerate(descriptions):
            yield index, _generate_one(client, index, description)
        return

    workers = min(settings.max_parallel_requests, len(descriptions))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="lawmemes-image") as executor:
        futures = {
            executor.submit(_generate_one, client, index, description): index
            for index, description in enumerate(descriptions)
        }
        for future in as_completed(futures):
            yield futures[future], future.result()
