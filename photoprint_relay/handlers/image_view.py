"""
Legacy Image Viewer Method
==========================

Windows Photo Viewer's ``ImageView_PrintTo`` entry point. Works only for
image files but, unlike the shell verb, takes an explicit printer name.
"""

import os
from typing import List

from .base import PrintMethod, PrintRequest
from ..config import IMAGE_EXTENSIONS
from ..printing.commands import run_command


class ImageViewMethod(PrintMethod):
    """``rundll32 shimgvw.dll,ImageView_PrintTo``."""

    name = 'image_view'

    def applies(self, request: PrintRequest) -> bool:
        return request.path.suffix.lower().lstrip('.') in IMAGE_EXTENSIONS

    def build_args(self, request: PrintRequest) -> List[str]:
        system_root = os.environ.get('SystemRoot', r'C:\Windows')
        entry = f'{system_root}\\System32\\shimgvw.dll,ImageView_PrintTo'
        args = ['rundll32.exe', entry, str(request.path)]
        if request.has_printer:
            args.append(request.printer_name)
        return args

    async def print_copy(self, request: PrintRequest) -> None:
        await run_command(self.build_args(request), self.timeout, self.logger)
