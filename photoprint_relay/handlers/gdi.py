"""
GDI Method
==========

Renders the image through the Windows GDI printing subsystem via pywin32.

The printer DC is created from the printer's own configured settings, so
paper size, orientation and cut options chosen in the driver's
preferences apply. This is the only Windows method that honours them,
which matters for photo-booth dye-sub printers that cut 2x6 strips from
4x6 stock.
"""

import asyncio
import math
from typing import Tuple

from PIL import Image

from .base import PrintMethod, PrintRequest
from ..errors import CommandTimeout, PrintMethodError

# GetDeviceCaps indices
HORZRES = 8
VERTRES = 10


def pywin32_available() -> bool:
    """Check if the pywin32 printing modules can be imported."""
    try:
        import win32print  # noqa: F401
        import win32ui  # noqa: F401
    except ImportError:
        return False
    return True


def needs_rotation(image_size: Tuple[int, int], page_size: Tuple[int, int]) -> bool:
    """True when image and page orientations differ. Square never rotates."""
    img_w, img_h = image_size
    page_w, page_h = page_size
    if img_w == img_h or page_w == page_h:
        return False
    return (img_w > img_h) != (page_w > page_h)


def fit_to_page(image: Image.Image, page_w: int, page_h: int) -> Image.Image:
    """
    Rotate, scale and crop ``image`` to exactly fill ``page_w`` x ``page_h``.

    The image is turned 90 degrees when its orientation does not match the
    page, scaled by the larger of the width and height ratios so no edge
    is left blank, and the overflow is cropped evenly from both sides.
    """
    if needs_rotation(image.size, (page_w, page_h)):
        image = image.rotate(90, expand=True)

    img_w, img_h = image.size
    scale = max(page_w / img_w, page_h / img_h)
    scaled_w = max(page_w, math.ceil(img_w * scale))
    scaled_h = max(page_h, math.ceil(img_h * scale))
    image = image.resize((scaled_w, scaled_h), Image.Resampling.LANCZOS)

    left = (scaled_w - page_w) // 2
    top = (scaled_h - page_h) // 2
    return image.crop((left, top, left + page_w, top + page_h))


def print_with_gdi(file_path: str, printer_name: str, document_name: str) -> Tuple[int, int]:
    """
    Print one copy of ``file_path`` on ``printer_name``.

    Blocking; call from a worker thread.

    Returns:
        Printable area used, in device pixels
    """
    import win32print
    import win32ui
    from PIL import ImageWin

    if not printer_name:
        printer_name = win32print.GetDefaultPrinter()

    hdc = win32ui.CreateDC()
    hdc.CreatePrinterDC(printer_name)
    try:
        page_w = hdc.GetDeviceCaps(HORZRES)
        page_h = hdc.GetDeviceCaps(VERTRES)

        with Image.open(file_path) as source:
            image = source.convert('RGB')
        image = fit_to_page(image, page_w, page_h)

        hdc.StartDoc(document_name)
        hdc.StartPage()
        dib = ImageWin.Dib(image)
        dib.draw(hdc.GetHandleOutput(), (0, 0, page_w, page_h))
        hdc.EndPage()
        hdc.EndDoc()
    finally:
        hdc.DeleteDC()

    return page_w, page_h


class GDIMethod(PrintMethod):
    """Structured print through GDI, respecting printer preferences."""

    name = 'gdi'

    def applies(self, request: PrintRequest) -> bool:
        return pywin32_available()

    async def print_copy(self, request: PrintRequest) -> None:
        printer_name = request.printer_name if request.has_printer else ''
        try:
            page_w, page_h = await asyncio.wait_for(
                asyncio.to_thread(
                    print_with_gdi,
                    str(request.path),
                    printer_name,
                    f'PhotoPrint {request.path.stem}',
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            # The worker thread cannot be cancelled and may still spool the page
            self.logger.warning(
                'GDI print of %s timed out after %gs; it may still complete, '
                'so the next method could print a duplicate',
                request.path.name, self.timeout,
            )
            raise CommandTimeout(self.name, self.timeout)
        except Exception as e:
            # win32ui.error, PIL errors and OSError all surface here
            raise PrintMethodError(f'GDI print failed: {e}') from e
        self.logger.debug('GDI page %dx%d', page_w, page_h)
