"""swapsettle.instrument — Interest-rate swap contract data."""

from swapsettle.instrument.swap import SwapOwners as SwapOwners
from swapsettle.instrument.swap import SwapTerms as SwapTerms
