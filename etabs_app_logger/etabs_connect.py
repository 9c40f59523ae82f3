#!/usr/bin/env python3
"""
ETABS API connection and model creation utilities

Attaches to (or launches) ETABS, builds a steel deck template model,
saves it, optionally analyzes it, and always closes and releases the
ETABS object once one was obtained.
"""

import argparse
import logging
import os
import sys
from typing import Optional

from .com_runtime import ComRuntime
from .config import ETABS_OBJECT_PROG_ID, PRESETS, EtabsSettings, SAMPLE_SETTINGS, STEEL_DECK_SETTINGS
from .logger import AppLogger, configure_logging, get_app_logger

logger = logging.getLogger(__name__)

_logger = AppLogger()


class _StepLog:
    """Narrates ETABS status codes and counts the non-zero ones"""

    def __init__(self, app_logger: AppLogger):
        self.app_logger = app_logger
        self.warnings = 0

    def check(self, ret, call_name: str, success_message: str):
        if ret == 0:
            self.app_logger.log(success_message)
            return
        self.warnings += 1
        self.app_logger.log_warning(f"{call_name} returned: {ret}")


def _frame_count(sap_model) -> Optional[int]:
    """Number of frame objects in the model, None when ETABS does not report it"""
    try:
        ret, number_frames, _frame_names = sap_model.FrameObj.GetNameList(0, [])
    except Exception as e:
        logger.debug(f"FrameObj.GetNameList failed: {e}")
        return None
    if ret != 0:
        return None
    return number_frames


def build_model(settings: EtabsSettings, app_logger: Optional[AppLogger] = None, runtime=None):
    """Create, save and analyze the model described by ``settings``.

    Nothing is raised to the caller: environment failures are logged as
    errors and end the run, non-zero ETABS status codes are logged as
    warnings and the run continues. If an ETABS object was obtained it is
    closed and released before returning, whatever happened before. A run
    that got no further than the helper only balances the COM apartment.
    """
    app_log = app_logger or _logger
    runtime = runtime or ComRuntime()
    steps = _StepLog(app_log)

    model_directory = settings.model_directory
    try:
        os.makedirs(model_directory, exist_ok=True)
        app_log.log(f"Model directory created/verified: {model_directory}")
    except Exception as e:
        app_log.log_error(f"Could not create directory: {model_directory}", e)
        return

    model_path = settings.model_path

    helper = None
    etabs_object = None
    sap_model = None

    try:
        try:
            helper = runtime.create_helper()
            app_log.log("Helper object created successfully")
        except Exception as e:
            app_log.log_error("Cannot create an instance of the Helper object", e)
            return

        if settings.attach_to_instance:
            try:
                etabs_object = helper.GetObject(ETABS_OBJECT_PROG_ID)
                if etabs_object is None:
                    raise RuntimeError(f"GetObject returned nothing for {ETABS_OBJECT_PROG_ID}")
                app_log.log("Attached to running ETABS instance")
            except Exception as e:
                app_log.log_error("No running instance of ETABS found or failed to attach", e)
                return
        else:
            try:
                if settings.specify_path:
                    etabs_object = helper.CreateObject(settings.program_path)
                    app_log.log(f"ETABS instance created from: {settings.program_path}")
                else:
                    etabs_object = helper.CreateObjectProgID(ETABS_OBJECT_PROG_ID)
                    app_log.log("ETABS instance created from latest installed version")

                ret = etabs_object.ApplicationStart()
                steps.check(ret, "ApplicationStart", "ETABS application started successfully")
            except Exception as e:
                app_log.log_error("Cannot start a new instance of ETABS", e)
                return

        sap_model = etabs_object.SapModel
        app_log.log("SAP Model reference obtained")

        ret = sap_model.InitializeNewModel()
        steps.check(ret, "InitializeNewModel", "New model initialized successfully")

        template = settings.template
        ret = sap_model.File.NewSteelDeck(*template.as_args())
        steps.check(
            ret,
            "NewSteelDeck",
            f"Steel deck template model created successfully with {template.num_stories} stories",
        )

        ret = sap_model.File.Save(model_path)
        steps.check(ret, "Save", f"Model saved successfully to: {model_path}")

        if settings.run_analysis:
            ret = sap_model.Analyze.RunAnalysis()
            steps.check(ret, "RunAnalysis", "Analysis completed successfully")

        if settings.report_frames:
            number_frames = _frame_count(sap_model)
            if number_frames is not None:
                app_log.log(f"Model contains {number_frames} frame objects")

        if settings.refresh_view:
            sap_model.View.RefreshView(0, False)
            app_log.log("Model view refreshed")

        if steps.warnings:
            app_log.log_warning(f"{settings.label} completed with {steps.warnings} warning(s)")
        else:
            app_log.log(f"{settings.label} completed successfully!")

    except Exception as e:
        app_log.log_error("An unexpected error occurred during ETABS model creation", e)

    finally:
        if etabs_object is not None:
            try:
                etabs_object.ApplicationExit(False)
                app_log.log("ETABS application closed")
            except Exception as e:
                app_log.log_warning("Error closing ETABS application", e)

            try:
                sap_model = None
                helper = None
                etabs_object = None
                runtime.release()
                app_log.log("ETABS object released successfully")
            except Exception as e:
                app_log.log_warning("Error releasing ETABS object", e)

        elif helper is not None:
            helper = None
            try:
                runtime.uninitialize()
            except Exception as e:
                logger.warning(f"COM uninitialize failed: {e}")


def create_sample(app_logger: Optional[AppLogger] = None, runtime=None):
    """Creates a sample ETABS model with a steel deck template and runs the analysis"""
    build_model(SAMPLE_SETTINGS, app_logger=app_logger, runtime=runtime)


def create_steel_deck_model(app_logger: Optional[AppLogger] = None, runtime=None):
    """Creates a simple steel deck model for testing"""
    build_model(STEEL_DECK_SETTINGS, app_logger=app_logger, runtime=runtime)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Build and save an ETABS steel deck model through the ETABS API"
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="sample",
        help="Model preset to build"
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--attach",
        dest="attach_to_instance",
        action="store_const",
        const=True,
        help="Attach to a running ETABS instance"
    )
    mode.add_argument(
        "--launch",
        dest="attach_to_instance",
        action="store_const",
        const=False,
        help="Start a new ETABS instance"
    )
    parser.add_argument("--program-path", help="ETABS.exe to launch (implies --launch)")
    parser.add_argument("--model-dir", help="Directory the .edb file is saved to")
    parser.add_argument(
        "--structured",
        action="store_true",
        help="Route messages through logging instead of plain console lines"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level used with --structured"
    )
    args = parser.parse_args(argv)
    if args.program_path and args.attach_to_instance:
        parser.error("--program-path launches ETABS and cannot be combined with --attach")
    return args


def settings_from_args(args) -> EtabsSettings:
    settings = PRESETS[args.preset]
    attach = args.attach_to_instance
    specify_path = None
    if args.program_path:
        attach = False
        specify_path = True
    return settings.with_overrides(
        attach_to_instance=attach,
        specify_path=specify_path,
        program_path=args.program_path,
        model_directory=args.model_dir,
    )


def main(argv=None):
    args = parse_args(argv)
    settings = settings_from_args(args)

    app_log = None
    if args.structured:
        configure_logging(level=getattr(logging, args.log_level))
        app_log = get_app_logger()

    build_model(settings, app_logger=app_log)
    return 0


if __name__ == "__main__":
    sys.exit(main())
