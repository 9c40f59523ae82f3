"""
Fake ETABS COM objects for exercising the orchestration without ETABS.

Every call made through the fakes is appended to a shared ``calls`` list as
``(name, args)`` so tests can assert on ordering.
"""

import sys
import types

import pytest

from etabs_app_logger.config import SteelDeckTemplate, EtabsSettings


class FakeEtabs:
    """Shared call recorder with per-call return codes and injected failures"""

    def __init__(self, returns=None, raises=None):
        self.calls = []
        self.returns = {
            "FrameObj.GetNameList": (0, 3, ("F1", "F2", "F3")),
        }
        self.returns.update(returns or {})
        self.raises = dict(raises or {})

    def call(self, name, *args):
        self.calls.append((name, args))
        if name in self.raises:
            raise self.raises[name]
        return self.returns.get(name, 0)

    def names(self):
        return [name for name, _ in self.calls]


class _Group:
    def __init__(self, etabs, prefix):
        self._etabs = etabs
        self._prefix = prefix

    def __getattr__(self, attr):
        name = f"{self._prefix}.{attr}"
        return lambda *args: self._etabs.call(name, *args)


class FakeSapModel:
    def __init__(self, etabs):
        self._etabs = etabs
        self.File = _Group(etabs, "File")
        self.Analyze = _Group(etabs, "Analyze")
        self.FrameObj = _Group(etabs, "FrameObj")
        self.View = _Group(etabs, "View")

    def InitializeNewModel(self):
        return self._etabs.call("InitializeNewModel")


class FakeEtabsObject:
    def __init__(self, etabs):
        self._etabs = etabs

    @property
    def SapModel(self):
        self._etabs.call("SapModel")
        return FakeSapModel(self._etabs)

    def ApplicationStart(self):
        return self._etabs.call("ApplicationStart")

    def ApplicationExit(self, file_save):
        return self._etabs.call("ApplicationExit", file_save)


class FakeHelper:
    def __init__(self, etabs):
        self._etabs = etabs

    def GetObject(self, prog_id):
        self._etabs.call("GetObject", prog_id)
        return FakeEtabsObject(self._etabs)

    def CreateObject(self, program_path):
        self._etabs.call("CreateObject", program_path)
        return FakeEtabsObject(self._etabs)

    def CreateObjectProgID(self, prog_id):
        self._etabs.call("CreateObjectProgID", prog_id)
        return FakeEtabsObject(self._etabs)


class FakeRuntime:
    def __init__(self, etabs, type_names=("cHelper", "Helper", "cOAPI")):
        self._etabs = etabs
        self.type_names = list(type_names)

    def create_helper(self):
        self._etabs.call("create_helper")
        return FakeHelper(self._etabs)

    def release(self):
        self._etabs.call("release")

    def uninitialize(self):
        self._etabs.call("uninitialize")

    def type_library_names(self, path):
        self._etabs.call("type_library_names", path)
        return self.type_names


@pytest.fixture
def etabs():
    return FakeEtabs()


@pytest.fixture
def runtime(etabs):
    return FakeRuntime(etabs)


@pytest.fixture
def launch_settings(tmp_path):
    return EtabsSettings(
        model_name="Test_Model.edb",
        template=SteelDeckTemplate(4, 12, 12, 4, 4, 24, 24),
        attach_to_instance=False,
        specify_path=False,
        model_directory=str(tmp_path / "models"),
    )


class RecordingTypeLib:
    def __init__(self, names):
        self._names = names

    def GetTypeInfoCount(self):
        return len(self._names)

    def GetDocumentation(self, index):
        return (self._names[index], None, 0, None)


class ComModules:
    """Stand-ins for pythoncom and win32com.client that record COM calls"""

    def __init__(self):
        self.calls = []
        self.helper = "helper"
        self.dispatch_error = None

        self.pythoncom = types.ModuleType("pythoncom")
        self.pythoncom.CoInitialize = lambda: self.calls.append("CoInitialize")
        self.pythoncom.CoUninitialize = lambda: self.calls.append("CoUninitialize")
        self.pythoncom.LoadTypeLib = self._load_type_lib

        self.client = types.ModuleType("win32com.client")
        self.client.Dispatch = self._dispatch
        self.win32com = types.ModuleType("win32com")
        self.win32com.client = self.client

    def _dispatch(self, prog_id):
        self.calls.append(("Dispatch", prog_id))
        if self.dispatch_error is not None:
            raise self.dispatch_error
        return self.helper

    def _load_type_lib(self, path):
        self.calls.append(("LoadTypeLib", path))
        return RecordingTypeLib(["cHelper", "Helper"])

    def balanced(self):
        return self.calls.count("CoInitialize") == self.calls.count("CoUninitialize")


@pytest.fixture
def com(monkeypatch):
    modules = ComModules()
    monkeypatch.setitem(sys.modules, "pythoncom", modules.pythoncom)
    monkeypatch.setitem(sys.modules, "win32com", modules.win32com)
    monkeypatch.setitem(sys.modules, "win32com.client", modules.client)
    return modules
