"""fbar: reaction tables to Flux Balance Analysis linear programs.

Core contract:
- input: one row per reaction (abbreviation, equation, uppbnd, lowbnd, obj_coef)
- workflow: split equations -> parse terms -> long format -> sparse LP

The long format (ExpandedModel) can be edited before assembly.
"""

import logging

from .errors import FbarError, SchemaError, MalformedEquationError, MalformedTermError
from .equation import SplitEquation, split_equation, split_on_arrow
from .terms import Term, tokenize_term, split_terms, parse_met_list
from .expand import ExpandedModel, validate_reaction_table, reactiontbl_to_expanded
from .assemble import LPProblem, expanded_to_lp
from .api import reactiontbl_to_lp, expand_reactions, collapse_reactions_lp, parse_reaction_table
from .utils import DEFAULT_ARROW, TERM_SEPARATOR

logging.getLogger(__name__).addHandler(logging.NullHandler())
