"""pywin32 boundary for the ETABS API"""

import gc
import logging
from typing import List

from .config import HELPER_PROG_ID

logger = logging.getLogger(__name__)


class ComRuntime:
    """Creates the ETABSv1 helper and releases the COM apartment afterwards"""

    def __init__(self, helper_prog_id: str = HELPER_PROG_ID):
        self.helper_prog_id = helper_prog_id
        self._initialized = False

    def create_helper(self):
        """Initialize COM on this thread and dispatch the ETABS helper object"""
        import pythoncom
        import win32com.client

        pythoncom.CoInitialize()
        self._initialized = True
        logger.debug("COM initialized, dispatching %s", self.helper_prog_id)
        try:
            return win32com.client.Dispatch(self.helper_prog_id)
        except Exception:
            self.uninitialize()
            raise

    def uninitialize(self):
        """Balance the CoInitialize from create_helper, once"""
        if not self._initialized:
            return
        import pythoncom

        self._initialized = False
        pythoncom.CoUninitialize()
        logger.debug("COM uninitialized")

    def release(self):
        """Release the COM references dropped by the caller"""
        # Dispatch wrappers only let go of the interface when collected
        gc.collect()
        self.uninitialize()

    def type_library_names(self, path: str) -> List[str]:
        """Names of every type described by the type library at ``path``"""
        import pythoncom

        tlb = pythoncom.LoadTypeLib(path)
        return [tlb.GetDocumentation(i)[0] for i in range(tlb.GetTypeInfoCount())]
