import pytest

from liftsim import Direction, Elevator, ElevatorState, Floor, InvalidConfiguration, Passenger

NUM_FLOORS = 5


@pytest.fixture
def floors():
    return [Floor(i) for i in range(1, NUM_FLOORS + 1)]


def run_ticks(elevator, floors, start, stop):
    for tick in range(start, stop):
        elevator.update(tick, NUM_FLOORS, floors)


def test_single_trip_timing(floors):
    passenger = Passenger(1, 0, 1, 3)
    floors[0].add_waiting_passenger(passenger)
    elevator = Elevator(0, speed=10, stop_dwell=2)

    elevator.update(0, NUM_FLOORS, floors)
    assert elevator.passengers == [passenger]
    assert elevator.state is ElevatorState.MOVING_UP
    assert elevator.next_action_time == 10

    run_ticks(elevator, floors, 1, 21)
    assert elevator.current_floor == 3
    assert elevator.state is ElevatorState.STOPPING

    run_ticks(elevator, floors, 21, 23)
    assert floors[2].delivered == [passenger]
    assert passenger.wait_time == 0
    assert passenger.travel_time == 20
    assert not elevator.has_passengers()


def test_passes_floor_without_business(floors):
    floors[0].add_waiting_passenger(Passenger(1, 0, 1, 4))
    elevator = Elevator(0, speed=3, stop_dwell=2)

    run_ticks(elevator, floors, 0, 4)

    assert elevator.current_floor == 2
    assert elevator.state is ElevatorState.MOVING_UP
    assert elevator.next_action_time == 6


def test_update_twice_in_same_tick_is_ignored(floors):
    floors[0].add_waiting_passenger(Passenger(1, 0, 1, 3))
    elevator = Elevator(0)

    elevator.update(0, NUM_FLOORS, floors)
    floors[0].add_waiting_passenger(Passenger(2, 0, 1, 2))
    elevator.update(0, NUM_FLOORS, floors)

    assert len(elevator.passengers) == 1
    assert len(floors[0].waiting) == 1


def test_boarding_stops_at_capacity(floors):
    riders = [Passenger(i, 0, 1, 4) for i in range(1, 11)]
    for rider in riders:
        floors[0].add_waiting_passenger(rider)
    elevator = Elevator(0, capacity=8)

    elevator.update(0, NUM_FLOORS, floors)

    assert elevator.passengers == riders[:8]
    assert list(floors[0].waiting) == riders[8:]


def test_ignores_riders_going_the_other_way(floors):
    down = Passenger(1, 0, 3, 1)
    floors[2].add_waiting_passenger(down)
    elevator = Elevator(0, current_floor=3, direction=Direction.UP)

    elevator.update(0, NUM_FLOORS, floors)

    assert not elevator.has_passengers()
    assert list(floors[2].waiting) == [down]
    assert elevator.state is ElevatorState.MOVING_UP


def test_terminal_floor_forces_direction_before_pickup(floors):
    up = Passenger(1, 0, 1, 2)
    floors[0].add_waiting_passenger(up)
    elevator = Elevator(0, current_floor=1, direction=Direction.DOWN)

    elevator.update(0, NUM_FLOORS, floors)

    assert elevator.direction is Direction.UP
    assert elevator.passengers == [up]


def test_reverses_at_top_floor(floors):
    floors[0].add_waiting_passenger(Passenger(1, 0, 1, 2))
    elevator = Elevator(
        0,
        speed=4,
        current_floor=4,
        state=ElevatorState.MOVING_UP,
        next_action_time=0,
    )

    elevator.update(0, NUM_FLOORS, floors)

    assert elevator.current_floor == 5
    assert elevator.direction is Direction.DOWN
    assert elevator.state is ElevatorState.MOVING_DOWN
    assert elevator.next_action_time == 4


def test_stops_at_top_floor_for_downward_rider(floors):
    floors[4].add_waiting_passenger(Passenger(1, 0, 5, 1))
    elevator = Elevator(
        0,
        stop_dwell=3,
        current_floor=4,
        state=ElevatorState.MOVING_UP,
        next_action_time=7,
    )

    elevator.update(7, NUM_FLOORS, floors)

    assert elevator.state is ElevatorState.STOPPING
    assert elevator.next_action_time == 9


def test_full_car_still_stops_for_riders_heading_its_way(floors):
    rider = Passenger(1, 0, 1, 5)
    rider.record_boarding(0)
    elevator = Elevator(
        0,
        capacity=1,
        current_floor=1,
        state=ElevatorState.MOVING_UP,
        next_action_time=0,
        passengers=[rider],
    )
    waiting = Passenger(2, 0, 2, 4)
    floors[1].add_waiting_passenger(waiting)

    elevator.update(0, NUM_FLOORS, floors)
    assert elevator.current_floor == 2
    assert elevator.state is ElevatorState.STOPPING

    run_ticks(elevator, floors, 1, 3)
    assert elevator.passengers == [rider]
    assert list(floors[1].waiting) == [waiting]
    assert elevator.state is ElevatorState.MOVING_UP
    assert elevator.next_action_time == 12


def test_single_tick_dwell_still_delivers(floors):
    rider = Passenger(1, 0, 1, 2)
    floors[0].add_waiting_passenger(rider)
    elevator = Elevator(0, speed=2, stop_dwell=1)

    run_ticks(elevator, floors, 0, 3)
    assert elevator.current_floor == 2
    assert elevator.state is ElevatorState.STOPPING
    assert elevator.next_action_time == 2

    elevator.update(3, NUM_FLOORS, floors)
    assert elevator.state is ElevatorState.STOPPED

    elevator.update(4, NUM_FLOORS, floors)
    assert floors[1].delivered == [rider]
    assert rider.travel_time == 2
    assert not elevator.has_passengers()


def test_idle_elevator_stays_stopped(floors):
    elevator = Elevator(0)

    run_ticks(elevator, floors, 0, 5)

    assert elevator.state is ElevatorState.STOPPED
    assert elevator.current_floor == 1


def test_idle_elevator_departs_when_someone_waits_elsewhere(floors):
    elevator = Elevator(0, speed=2)
    elevator.update(0, NUM_FLOORS, floors)
    floors[3].add_waiting_passenger(Passenger(1, 1, 4, 5))

    elevator.update(1, NUM_FLOORS, floors)

    assert elevator.state is ElevatorState.MOVING_UP
    assert elevator.next_action_time == 3


@pytest.mark.parametrize("field", ["speed", "stop_dwell", "capacity"])
def test_non_positive_settings_are_rejected(field):
    with pytest.raises(InvalidConfiguration):
        Elevator(0, **{field: 0})
