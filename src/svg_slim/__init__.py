# This file is part of svg-slim.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

__version__ = "0.1.0"

from .diagnostics import Diagnostics as Diagnostics
from .diagnostics import PathReport as PathReport
from .options import MinifyOptions as MinifyOptions
from .options import SimplificationConfig as SimplificationConfig
from .path_parser import PathParser as PathParser
from .pipeline import OptimizeResult as OptimizeResult
from .pipeline import SizeInfo as SizeInfo
from .pipeline import optimize_svg as optimize_svg
from .pipeline import process_path_data as process_path_data
from .simplify import simplify_points as simplify_points
from .svg import SvgPath as SvgPath
