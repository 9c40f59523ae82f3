#!/usr/bin/env python3
"""
ETABS connection and model template settings.

Module-level constants hold the install and output defaults; the two
dataclass presets describe the models the scripts build.
"""

import os
from dataclasses import dataclass, replace

# ========== ETABS install ==========
INSTALL_DIRECTORY = r"C:\Program Files\Computers and Structures\ETABS 22"
PROGRAM_PATH = INSTALL_DIRECTORY + r"\ETABS.exe"
API_DLL_NAME = "ETABSv1.dll"
API_TYPELIB_NAME = "ETABSv1.tlb"

# ========== COM identifiers ==========
HELPER_PROG_ID = "ETABSv1.Helper"
ETABS_OBJECT_PROG_ID = "CSI.ETABS.API.ETABSObject"

# ========== Model output ==========
MODEL_DIRECTORY = r"C:\CSi_ETABS_API_Example"


@dataclass(frozen=True)
class SteelDeckTemplate:
    """Parameters passed to SapModel.File.NewSteelDeck"""
    num_stories: int
    x_dim: float
    y_dim: float
    story_height: float
    x_joints: int
    y_joints: int
    deck_type: int

    def as_args(self):
        return (
            self.num_stories,
            self.x_dim,
            self.y_dim,
            self.story_height,
            self.x_joints,
            self.y_joints,
            self.deck_type,
        )


@dataclass(frozen=True)
class EtabsSettings:
    model_name: str
    template: SteelDeckTemplate
    attach_to_instance: bool = False
    specify_path: bool = False
    program_path: str = PROGRAM_PATH
    model_directory: str = MODEL_DIRECTORY
    run_analysis: bool = True
    report_frames: bool = True
    refresh_view: bool = True
    label: str = "ETABS sample model creation"

    @property
    def model_path(self) -> str:
        return os.path.join(self.model_directory, self.model_name)

    def with_overrides(self, **changes) -> "EtabsSettings":
        """Copy with the given fields replaced (None values are ignored)"""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


SAMPLE_SETTINGS = EtabsSettings(
    model_name="ETABS_API_Example.edb",
    template=SteelDeckTemplate(4, 12, 12, 4, 4, 24, 24),
    attach_to_instance=True,
    specify_path=False,
)

STEEL_DECK_SETTINGS = EtabsSettings(
    model_name="SteelDeck_Model.edb",
    template=SteelDeckTemplate(3, 24, 24, 10, 4, 4, 24),
    attach_to_instance=False,
    specify_path=False,
    run_analysis=False,
    report_frames=False,
    refresh_view=False,
    label="Steel deck model creation",
)

PRESETS = {
    "sample": SAMPLE_SETTINGS,
    "steel-deck": STEEL_DECK_SETTINGS,
}
