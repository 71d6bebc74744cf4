"""
Window Capture Module for Sigmar's Garden Solver

Provides functionality to detect, lock onto, and capture the game window.
Uses the Windows API via ctypes for window management and mss for screen capture.
Everything works on the window's client area, which is where the board
layout coordinates live.
"""

import ctypes
import logging
from ctypes import wintypes
from typing import Optional, Tuple, List
from dataclasses import dataclass

import psutil
import mss
from mss.exception import ScreenShotError
from PIL import Image

logger = logging.getLogger(__name__)

# The game's process name (Opus Magnum runs as Lightning.exe)
DEFAULT_PROCESS_NAME = "Lightning"

# PrintWindow constants
PW_CLIENTONLY = 1
PW_RENDERFULLCONTENT = 2

# GDI constants
DIB_RGB_COLORS = 0
BI_RGB = 0


class BITMAPINFOHEADER(ctypes.Structure):
    _fields_ = [
        ('biSize', wintypes.DWORD),
        ('biWidth', wintypes.LONG),
        ('biHeight', wintypes.LONG),
        ('biPlanes', wintypes.WORD),
        ('biBitCount', wintypes.WORD),
        ('biCompression', wintypes.DWORD),
        ('biSizeImage', wintypes.DWORD),
        ('biXPelsPerMeter', wintypes.LONG),
        ('biYPelsPerMeter', wintypes.LONG),
        ('biClrUsed', wintypes.DWORD),
        ('biClrImportant', wintypes.DWORD),
    ]


@dataclass
class WindowInfo:
    """Information about a detected window."""
    hwnd: int
    pid: int
    title: str
    rect: Tuple[int, int, int, int]  # Client area on screen (x, y, width, height)


def _matches(name: Optional[str], process_name: str) -> bool:
    """Compare process names ignoring case and an optional .exe suffix."""
    if not name:
        return False
    name = name.lower()
    target = process_name.lower()
    if name.endswith(".exe"):
        name = name[:-4]
    if target.endswith(".exe"):
        target = target[:-4]
    return name == target


def get_process_ids(process_name: str = DEFAULT_PROCESS_NAME) -> List[int]:
    """
    Get all process IDs for a given process name.

    Args:
        process_name: Name of the process to find

    Returns:
        List of process IDs matching the name
    """
    pids = []
    for proc in psutil.process_iter(['pid', 'name']):
        try:
            if _matches(proc.info['name'], process_name):
                pids.append(proc.info['pid'])
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
            continue
    return pids


def _get_window_thread_process_id(hwnd: int) -> int:
    """Get the process ID associated with a window handle."""
    pid = wintypes.DWORD()
    ctypes.windll.user32.GetWindowThreadProcessId(hwnd, ctypes.byref(pid))
    return pid.value


def _get_window_text(hwnd: int) -> str:
    """Get the title text of a window."""
    length = ctypes.windll.user32.GetWindowTextLengthW(hwnd) + 1
    buffer = ctypes.create_unicode_buffer(length)
    ctypes.windll.user32.GetWindowTextW(hwnd, buffer, length)
    return buffer.value


def get_client_rect(hwnd: int) -> Optional[Tuple[int, int, int, int]]:
    """
    Get the client area of a window in screen coordinates.

    Args:
        hwnd: Window handle

    Returns:
        Tuple of (x, y, width, height) or None if the window is gone
    """
    rect = wintypes.RECT()
    if not ctypes.windll.user32.GetClientRect(hwnd, ctypes.byref(rect)):
        return None
    origin = wintypes.POINT(0, 0)
    if not ctypes.windll.user32.ClientToScreen(hwnd, ctypes.byref(origin)):
        return None
    return (origin.x, origin.y, rect.right - rect.left, rect.bottom - rect.top)


def find_game_window(process_name: str = DEFAULT_PROCESS_NAME) -> Optional[WindowInfo]:
    """
    Find the main window handle for the target process.

    Searches for visible windows belonging to the specified process and returns
    information about the first one with a non-empty client area.

    Args:
        process_name: Name of the process to find

    Returns:
        WindowInfo object if found, None otherwise

    Example:
        >>> info = find_game_window()
        >>> if info:
        ...     print(f"Found window: {info.title} at {info.rect}")
    """
    pids = get_process_ids(process_name)
    if not pids:
        return None

    windows = []
    enum_callback = ctypes.WINFUNCTYPE(
        ctypes.c_bool,
        wintypes.HWND,
        wintypes.LPARAM
    )

    @enum_callback
    def callback(hwnd, lparam):
        if ctypes.windll.user32.IsWindowVisible(hwnd):
            windows.append(hwnd)
        return True

    ctypes.windll.user32.EnumWindows(callback, 0)

    for hwnd in windows:
        window_pid = _get_window_thread_process_id(hwnd)
        if window_pid in pids:
            rect = get_client_rect(hwnd)
            if rect and rect[2] > 0 and rect[3] > 0:
                return WindowInfo(
                    hwnd=hwnd,
                    pid=window_pid,
                    title=_get_window_text(hwnd),
                    rect=rect
                )

    return None


def is_window_valid(hwnd: int) -> bool:
    """
    Check if a window handle is still valid.

    Args:
        hwnd: Window handle to check

    Returns:
        True if window exists and is valid, False otherwise
    """
    return bool(ctypes.windll.user32.IsWindow(hwnd))


def is_window_minimized(hwnd: int) -> bool:
    """Check if a window is minimized."""
    return bool(ctypes.windll.user32.IsIconic(hwnd))


def _capture_with_printwindow(hwnd: int, width: int, height: int) -> Optional[Image.Image]:
    """
    Capture the client area using the PrintWindow API (excludes overlays).

    Args:
        hwnd: Window handle
        width: Client width
        height: Client height

    Returns:
        PIL Image or None if failed
    """
    gdi32 = ctypes.windll.gdi32
    user32 = ctypes.windll.user32

    client_dc = user32.GetDC(hwnd)
    if not client_dc:
        return None

    try:
        mem_dc = gdi32.CreateCompatibleDC(client_dc)
        if not mem_dc:
            return None

        try:
            bitmap = gdi32.CreateCompatibleBitmap(client_dc, width, height)
            if not bitmap:
                return None

            try:
                old_bitmap = gdi32.SelectObject(mem_dc, bitmap)

                # PW_RENDERFULLCONTENT works better for DWM-composed windows
                result = user32.PrintWindow(hwnd, mem_dc, PW_CLIENTONLY | PW_RENDERFULLCONTENT)
                if not result:
                    result = user32.PrintWindow(hwnd, mem_dc, PW_CLIENTONLY)

                if not result:
                    gdi32.SelectObject(mem_dc, old_bitmap)
                    return None

                bmi = BITMAPINFOHEADER()
                bmi.biSize = ctypes.sizeof(BITMAPINFOHEADER)
                bmi.biWidth = width
                bmi.biHeight = -height  # Negative for top-down DIB
                bmi.biPlanes = 1
                bmi.biBitCount = 32
                bmi.biCompression = BI_RGB
                bmi.biSizeImage = width * height * 4

                buffer = ctypes.create_string_buffer(width * height * 4)
                lines = gdi32.GetDIBits(
                    mem_dc, bitmap, 0, height,
                    buffer, ctypes.byref(bmi), DIB_RGB_COLORS
                )

                gdi32.SelectObject(mem_dc, old_bitmap)

                if lines == 0:
                    return None

                img = Image.frombuffer('RGBA', (width, height), buffer.raw, 'raw', 'BGRA', 0, 1)
                return img.convert('RGB')

            finally:
                gdi32.DeleteObject(bitmap)
        finally:
            gdi32.DeleteDC(mem_dc)
    finally:
        user32.ReleaseDC(hwnd, client_dc)


def _capture_with_mss(x: int, y: int, width: int, height: int) -> Optional[Image.Image]:
    """
    Capture a screen region using mss (fallback method).

    Note: This captures screen pixels including any overlays.
    """
    try:
        with mss.mss() as sct:
            monitor = {
                "left": x,
                "top": y,
                "width": width,
                "height": height
            }
            screenshot = sct.grab(monitor)
            return Image.frombytes(
                "RGB",
                (screenshot.width, screenshot.height),
                screenshot.rgb
            )
    except ScreenShotError as e:
        logger.debug(f"mss capture failed: {e}")
        return None


def capture_client(hwnd: int) -> Optional[Image.Image]:
    """
    Capture the client area of a window as a PIL Image.

    Uses PrintWindow to capture window content directly, and falls back to
    mss screen capture if PrintWindow fails.

    Args:
        hwnd: Window handle to capture

    Returns:
        PIL Image of the client area, or None if capture failed
    """
    if not is_window_valid(hwnd) or is_window_minimized(hwnd):
        return None

    rect = get_client_rect(hwnd)
    if not rect:
        return None

    x, y, width, height = rect
    if width <= 0 or height <= 0:
        return None

    img = _capture_with_printwindow(hwnd, width, height)
    if img is not None:
        return img

    return _capture_with_mss(x, y, width, height)


def crop_region(image: Image.Image, region: Tuple[int, int, int, int]) -> Image.Image:
    """
    Crop an (x, y, width, height) region out of a capture.

    Args:
        image: Client area capture
        region: Region in client coordinates

    Returns:
        Cropped image
    """
    x, y, width, height = region
    return image.crop((x, y, x + width, y + height))


class WindowCapture:
    """
    Manages the game window and captures from it.

    Example:
        >>> capture = WindowCapture()
        >>> if capture.find_window():
        ...     board_image = capture.grab_region(layout.rect)
    """

    def __init__(self, process_name: str = DEFAULT_PROCESS_NAME):
        """
        Initialize WindowCapture.

        Args:
            process_name: Name of the target process
        """
        self.process_name = process_name
        self.window_info: Optional[WindowInfo] = None

    @property
    def hwnd(self) -> Optional[int]:
        return self.window_info.hwnd if self.window_info else None

    def find_window(self) -> bool:
        """
        Attempt to find and lock onto the target window.

        Returns:
            True if window was found, False otherwise
        """
        self.window_info = find_game_window(self.process_name)
        if self.window_info:
            logger.debug(f"Found window '{self.window_info.title}' at {self.window_info.rect}")
            return True
        return False

    def is_active(self) -> bool:
        """
        Check if the tracked window is still valid and not minimized.

        Returns:
            True if window is active, False if lost or minimized
        """
        if not self.window_info:
            return False
        hwnd = self.window_info.hwnd
        return is_window_valid(hwnd) and not is_window_minimized(hwnd)

    def get_client_size(self) -> Optional[Tuple[int, int]]:
        """Current client area size as (width, height), or None."""
        if not self.window_info:
            return None
        rect = get_client_rect(self.window_info.hwnd)
        if rect:
            return (rect[2], rect[3])
        return None

    def grab_frame(self) -> Optional[Image.Image]:
        """
        Capture the current client area.

        Returns:
            PIL Image, or None if capture failed
        """
        if not self.window_info:
            return None
        return capture_client(self.window_info.hwnd)

    def grab_region(self, region: Tuple[int, int, int, int]) -> Optional[Image.Image]:
        """
        Capture part of the client area.

        Args:
            region: (x, y, width, height) in client coordinates

        Returns:
            PIL Image of the region, or None if capture failed
        """
        frame = self.grab_frame()
        if frame is None:
            return None
        return crop_region(frame, region)

    def release(self):
        """Release the tracked window."""
        self.window_info = None

    def get_status_string(self) -> str:
        """
        Get a human-readable status string for UI display.

        Returns:
            Status string like "Lightning (1920x1080)" or "Not detected"
        """
        if not self.window_info:
            return "Not detected"

        if not self.is_active():
            return "Window lost"

        size = self.get_client_size()
        if size:
            return f"{self.process_name} ({size[0]}x{size[1]})"

        return f"{self.process_name} (unknown size)"
