"""Constructor generator for annotated Go structs."""

from .constructor import render_constructor as render_constructor
from .errors import *
from .generate import assemble as assemble
from .generate import generate_unit as generate_unit
from .generate import plan_package as plan_package
from .generate import run as run
from .types import *
