"""
Module: builder.images.resource

Purpose:
    Asynchronously loaded images (template background, emblem, portrait)
    modelled as resource cells the renderer polls synchronously.

Key Classes:
    - ResourceState: PENDING / READY / FAILED
    - ImageResource: One resource cell
    - ImageLoader: Thread pool that decodes refs into cells

Rules:
    - get() never blocks; it returns the decoded image only when READY.
    - A FAILED cell degrades to flat fill / omission. Loading never
      raises to the caller.
    - Callbacks added after settlement run immediately.

Dependencies:
    - concurrent.futures: Background decoding
    - PIL: Image decoding
    - requests: http(s) refs
"""

from __future__ import annotations

import io
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Union

import requests
from PIL import Image

logger = logging.getLogger(__name__)

ImageRef = Union[str, Path, bytes]
DoneCallback = Callable[["ImageResource"], None]

DEFAULT_FETCH_TIMEOUT = 15.0


class ResourceLoadError(Exception):
    """Image ref could not be fetched or decoded."""
    pass


class ResourceState(str, Enum):
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


class ImageResource:
    """
    Resource cell holding a decoded image once available.

    Example:
        >>> cell = ImageResource("logo.png")
        >>> cell.get() is None       # still pending
        True
        >>> cell.resolve(Image.new("RGB", (4, 4)))
        >>> cell.state
        <ResourceState.READY: 'ready'>
    """

    def __init__(self, ref: Optional[ImageRef] = None) -> None:
        self.ref = ref
        self._state = ResourceState.PENDING
        self._image: Optional[Image.Image] = None
        self._error: Optional[str] = None
        self._callbacks: List[DoneCallback] = []
        self._lock = threading.Lock()
        self._settled = threading.Event()

    # ─────────────────────────────────────────────────────────────────────
    # Constructors
    # ─────────────────────────────────────────────────────────────────────

    @classmethod
    def ready(cls, image: Image.Image, ref: Optional[ImageRef] = None) -> "ImageResource":
        cell = cls(ref)
        cell.resolve(image)
        return cell

    @classmethod
    def failed(cls, error: str = "no image", ref: Optional[ImageRef] = None) -> "ImageResource":
        cell = cls(ref)
        cell.fail(error)
        return cell

    @classmethod
    def empty(cls) -> "ImageResource":
        """Cell for an image the user has not chosen."""
        return cls.failed("no image selected")

    # ─────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────

    @property
    def state(self) -> ResourceState:
        return self._state

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def is_pending(self) -> bool:
        return self._state is ResourceState.PENDING

    def get(self) -> Optional[Image.Image]:
        """Decoded image if READY, else None. Never blocks."""
        if self._state is ResourceState.READY:
            return self._image
        return None

    def wait(self, timeout: Optional[float] = None) -> Optional[Image.Image]:
        """Block until settled (or timeout) and return the image if READY."""
        self._settled.wait(timeout)
        return self.get()

    def resolve(self, image: Image.Image) -> None:
        self._settle(ResourceState.READY, image=image)

    def fail(self, error: str) -> None:
        self._settle(ResourceState.FAILED, error=error)

    def add_done_callback(self, callback: DoneCallback) -> None:
        """Run `callback(cell)` once settled; immediately if already settled."""
        with self._lock:
            if self._state is ResourceState.PENDING:
                self._callbacks.append(callback)
                return
        callback(self)

    def _settle(
        self,
        state: ResourceState,
        *,
        image: Optional[Image.Image] = None,
        error: Optional[str] = None,
    ) -> None:
        with self._lock:
            if self._state is not ResourceState.PENDING:
                logger.debug(f"Resource {self.ref!r} already settled as {self._state}")
                return
            self._image = image
            self._error = error
            self._state = state
            callbacks, self._callbacks = self._callbacks, []
        self._settled.set()

        for callback in callbacks:
            try:
                callback(self)
            except Exception as e:
                logger.error(f"Resource callback failed for {self.ref!r}: {e}")


class ImageLoader:
    """
    Thread pool-based image loader.

    Usage:
        loader = ImageLoader()
        try:
            background = loader.load(template.background_ref)
            ...
        finally:
            loader.shutdown()
    """

    def __init__(self, max_workers: int = 2, *, timeout: float = DEFAULT_FETCH_TIMEOUT):
        self._executor = ThreadPoolExecutor(max_workers=max_workers)
        self._timeout = timeout

    def load(self, ref: Optional[ImageRef]) -> ImageResource:
        """Start loading `ref` and return its (pending) cell."""
        if ref is None or (isinstance(ref, str) and not ref.strip()):
            return ImageResource.empty()

        cell = ImageResource(ref)
        self._executor.submit(self._load_into, cell, ref)
        return cell

    def _load_into(self, cell: ImageResource, ref: ImageRef) -> None:
        try:
            image = decode_image(ref, timeout=self._timeout)
        except ResourceLoadError as e:
            logger.warning(f"Image failed to load: {e}")
            cell.fail(str(e))
        else:
            cell.resolve(image)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "ImageLoader":
        return self

    def __exit__(self, *args) -> None:
        self.shutdown()


def decode_image(ref: ImageRef, *, timeout: float = DEFAULT_FETCH_TIMEOUT) -> Image.Image:
    """
    Fetch and decode an image ref synchronously.

    Args:
        ref: Raw bytes, a filesystem path, or an http(s) URL

    Returns:
        Decoded RGBA image (fully loaded, detached from its source)

    Raises:
        ResourceLoadError: If the ref cannot be fetched or decoded
    """
    try:
        if isinstance(ref, bytes):
            data = ref
        elif isinstance(ref, str) and ref.startswith(("http://", "https://")):
            response = requests.get(ref, timeout=timeout)
            response.raise_for_status()
            data = response.content
        else:
            data = Path(ref).read_bytes()

        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return img.convert("RGBA")
    except (OSError, ValueError, requests.RequestException) as e:
        raise ResourceLoadError(f"{_describe(ref)}: {e}") from e


def _describe(ref: ImageRef) -> str:
    if isinstance(ref, bytes):
        return f"<{len(ref)} bytes>"
    return str(ref)
