"""Entry point for the vector addition model."""

import sys

from vectoraddition.config import settings
from vectoraddition.simulation import run


if __name__ == "__main__":
    arguments = settings.build_arg_parser().parse_args(sys.argv[1:])
    runtime_settings = settings.load_runtime_settings(sys.argv[1:])
    settings.apply_runtime_settings(runtime_settings)
    run(runtime_settings, snapshot=arguments.snapshot, frames=arguments.frames)
