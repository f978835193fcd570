"""Reading Go source: parsing, type printing and package walking."""

from .parser import GoSyntaxError as GoSyntaxError
from .parser import parse_file as parse_file
from .parser import parse_source as parse_source
from .printer import TypePrinter as TypePrinter
from .printer import TypeResolutionError as TypeResolutionError
from .printer import format_type as format_type
from .printer import to_type_printer as to_type_printer
from .types import *
from .walker import AstWalker as AstWalker
from .walker import GoPackage as GoPackage
from .walker import dir_to_walkers as dir_to_walkers
from .walker import parse_dir as parse_dir
from .walker import parse_field_names as parse_field_names
