import pytest

from routing.eta_service import (
    DEFAULT_DELIVERY_PROFILE,
    EtaInput,
    VendorDeliveryProfile,
    calculate_eta_minutes,
)


def eta(distance_km=2.0, pending=1, peak=False, profile=DEFAULT_DELIVERY_PROFILE):
    return calculate_eta_minutes(
        EtaInput(profile=profile, distance_km=distance_km, current_pending_orders=pending, is_peak_hour=peak)
    )


def test_default_profile_values():
    assert DEFAULT_DELIVERY_PROFILE.base_prep_minutes == 5
    assert DEFAULT_DELIVERY_PROFILE.max_parallel_orders == 3
    assert DEFAULT_DELIVERY_PROFILE.buffer_minutes == 5
    assert DEFAULT_DELIVERY_PROFILE.avg_rider_speed_kmph == 20


def test_within_capacity_off_peak():
    # prep 5 + travel (2/20)*60 = 6 + buffer 5
    result = eta(distance_km=2, pending=1)
    assert result.raw_eta == pytest.approx(16)
    assert (result.min_eta, result.max_eta) == (11, 21)


def test_backlog_adds_two_minutes_per_excess_order():
    # 5 pending, capacity 3 -> 2 excess -> prep 9
    result = eta(distance_km=2, pending=5)
    assert result.raw_eta == pytest.approx(20)
    assert (result.min_eta, result.max_eta) == (15, 25)


def test_peak_hour_rounds_half_up_on_both_bounds():
    # travel 6 * 1.25 = 7.5 -> raw 17.5 -> 12.5 / 22.5 both round up
    result = eta(distance_km=2, pending=1, peak=True)
    assert result.raw_eta == pytest.approx(17.5)
    assert result.min_eta == 13
    assert result.max_eta == 23


def test_bounds_just_below_half_round_down():
    # travel (1.9/20)*60 = 5.7 -> raw 15.7 -> 10.7 / 20.7
    result = eta(distance_km=1.9, pending=0)
    assert (result.min_eta, result.max_eta) == (11, 21)

    # travel (1.3/20)*60 = 3.9 -> raw 13.9 -> 8.9 / 18.9
    result = eta(distance_km=1.3, pending=0)
    assert (result.min_eta, result.max_eta) == (9, 19)


def test_pending_equal_to_capacity_adds_no_delay():
    assert eta(pending=3).raw_eta == eta(pending=0).raw_eta


def test_min_eta_is_floored_at_five_minutes():
    instant = VendorDeliveryProfile(base_prep_minutes=0, max_parallel_orders=1, buffer_minutes=0, avg_rider_speed_kmph=20)
    result = eta(distance_km=0, pending=0, profile=instant)
    assert result.raw_eta == 0
    assert result.min_eta == 5
    assert result.max_eta == 5


@pytest.mark.parametrize("distance_km", [0, 0.05, 0.5, 1, 2.5, 3.3, 7, 12])
@pytest.mark.parametrize("pending", [0, 2, 3, 4, 8, 25])
@pytest.mark.parametrize("peak", [False, True])
def test_window_invariants(distance_km, pending, peak):
    result = eta(distance_km=distance_km, pending=pending, peak=peak)

    assert result.min_eta >= 5
    assert result.max_eta >= result.min_eta
    # default profile always has raw_eta >= 10, so the band is exactly 10 wide
    assert result.raw_eta >= 10
    assert result.max_eta - result.min_eta == 10


@pytest.mark.parametrize("distance_km", [0.1, 1, 2, 5, 10])
def test_peak_hour_is_slower_whenever_there_is_travel(distance_km):
    assert eta(distance_km=distance_km, peak=True).raw_eta > eta(distance_km=distance_km, peak=False).raw_eta


def test_peak_hour_makes_no_difference_at_zero_distance():
    assert eta(distance_km=0, peak=True).raw_eta == eta(distance_km=0, peak=False).raw_eta


def test_peak_penalty_applies_to_travel_only():
    slow_kitchen = VendorDeliveryProfile(base_prep_minutes=30, max_parallel_orders=1, buffer_minutes=0, avg_rider_speed_kmph=20)
    off_peak = eta(distance_km=2, pending=0, profile=slow_kitchen)
    peak = eta(distance_km=2, pending=0, peak=True, profile=slow_kitchen)
    # only the 6 travel minutes are stretched
    assert peak.raw_eta - off_peak.raw_eta == pytest.approx(1.5)


def test_backlog_never_decreases_eta():
    previous = None
    for pending in range(0, 40):
        current = eta(pending=pending).raw_eta
        if previous is not None:
            assert current >= previous
        previous = current


def test_backlog_is_not_capped():
    assert eta(pending=103).raw_eta - eta(pending=3).raw_eta == pytest.approx(200)


def test_as_window():
    assert eta().as_window() == {"minEta": 11, "maxEta": 21}


@pytest.mark.parametrize("kwargs", [
    {"base_prep_minutes": -1},
    {"max_parallel_orders": 0},
    {"buffer_minutes": -0.5},
    {"avg_rider_speed_kmph": 0},
    {"avg_rider_speed_kmph": -10},
])
def test_profile_validation(kwargs):
    with pytest.raises(ValueError):
        VendorDeliveryProfile(**kwargs).validate()


def test_default_profile_is_valid():
    DEFAULT_DELIVERY_PROFILE.validate()


def test_profile_from_dict_accepts_both_key_styles():
    camel = VendorDeliveryProfile.from_dict(
        {"basePrepMinutes": 8, "maxParallelOrders": 5, "bufferMinutes": 3, "avgRiderSpeedKmph": 25}
    )
    snake = VendorDeliveryProfile.from_dict(
        {"base_prep_minutes": 8, "max_parallel_orders": 5, "buffer_minutes": 3, "avg_rider_speed_kmph": 25}
    )
    assert camel == snake == VendorDeliveryProfile(8, 5, 3, 25)


def test_profile_from_dict_keeps_defaults_for_missing_keys():
    assert VendorDeliveryProfile.from_dict({"bufferMinutes": 2}) == VendorDeliveryProfile(buffer_minutes=2)


def test_profile_from_dict_rejects_zero_speed():
    with pytest.raises(ValueError):
        VendorDeliveryProfile.from_dict({"avgRiderSpeedKmph": 0})


@pytest.mark.parametrize("raw", [
    {"avgRiderSpeedKmph": "nan"},
    {"avgRiderSpeedKmph": "inf"},
    {"basePrepMinutes": float("inf")},
    {"buffer_minutes": "-inf"},
])
def test_profile_from_dict_rejects_non_finite_values(raw):
    with pytest.raises(ValueError):
        VendorDeliveryProfile.from_dict(raw)


@pytest.mark.parametrize("profile", [
    VendorDeliveryProfile(base_prep_minutes=float("nan")),
    VendorDeliveryProfile(avg_rider_speed_kmph=float("inf")),
    VendorDeliveryProfile(max_parallel_orders=True),
    VendorDeliveryProfile(buffer_minutes="5"),
])
def test_profile_validate_rejects_non_finite_and_non_numeric(profile):
    with pytest.raises(ValueError):
        profile.validate()
