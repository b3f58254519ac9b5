"""Constants shared across enumselect."""

from enumselect.constants.constants import *  # noqa: F401,F403
