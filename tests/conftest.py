import pytest

from rides.models import Ride
from scheduling.diagnostics import CollectingDiagnostics
from scheduling.heap import MinHeap


@pytest.fixture
def diagnostics():
    return CollectingDiagnostics()


@pytest.fixture
def heap(diagnostics):
    return MinHeap(diagnostics=diagnostics)


# Mock rides: id = n, time = 0n:00:00, passenger "Passenger n", route n -> n + 1
@pytest.fixture
def ride1():
    return Ride(1, "01:00:00", ["Passenger 1"], 1, 2)


@pytest.fixture
def ride2():
    return Ride(2, "02:00:00", ["Passenger 2"], 2, 3)


@pytest.fixture
def ride3():
    return Ride(3, "03:00:00", ["Passenger 3"], 3, 4)


@pytest.fixture
def ride4():
    return Ride(4, "04:00:00", ["Passenger 4"], 4, 5)


@pytest.fixture
def default_rides(ride1, ride2, ride3, ride4):
    return [ride1, ride2, ride3, ride4]
