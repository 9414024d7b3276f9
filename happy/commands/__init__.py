from .probe import (
    happy as happy,
    run as run,
)
