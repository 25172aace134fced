"""swapsettle.oracle — Signed rate observations."""

from swapsettle.oracle.observation import Observation as Observation
from swapsettle.oracle.observation import SignedObservation as SignedObservation
from swapsettle.oracle.observation import decode_observation as decode_observation
from swapsettle.oracle.observation import sign_observation as sign_observation
from swapsettle.oracle.observation import (
    verify_signed_observation as verify_signed_observation,
)
