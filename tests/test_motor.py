import pytest

from rcwssim.motor import Motor, MotorParam, MotorParameters, MotorState


def _params():
    return MotorParameters(phif=0.0066667, pn=4.0, jm=0.000339, speed_p=0.806, speed_i=1.6)


def test_default_motor_is_all_zero():
    motor = Motor()
    for kind in (MotorParam.PHIF, MotorParam.PN, MotorParam.JM, MotorParam.SPEED_P, MotorParam.SPEED_I):
        assert motor.get_param(kind) == 0.0
    assert motor.speed == 0.0
    assert motor.angle == 0.0
    assert motor.state == MotorState()


def test_constructor_copies_parameters_and_clears_state():
    params = _params()
    params.state.integrator = 5.0
    motor = Motor(params)
    assert motor.get_param(MotorParam.JM) == 0.000339
    assert motor.get_param(MotorParam.SPEED_I) == 1.6
    assert motor.state == MotorState()
    motor.set_param(MotorParam.PN, 8.0)
    assert params.pn == 4.0


def test_set_param_reports_change():
    motor = Motor()
    assert motor.set_param(MotorParam.PN, 4.0) is True
    assert motor.set_param(MotorParam.PN, 4.0) is False
    assert motor.get_param(MotorParam.PN) == 4.0


@pytest.mark.parametrize("kind", [MotorParam.PHIF, MotorParam.PN, MotorParam.JM])
def test_strictly_positive_params_reject_zero_and_negative(kind):
    motor = Motor(_params())
    with pytest.raises(ValueError):
        motor.set_param(kind, 0.0)
    with pytest.raises(ValueError):
        motor.set_param(kind, -1.0)


@pytest.mark.parametrize("kind", [MotorParam.SPEED_P, MotorParam.SPEED_I])
def test_gains_accept_zero_but_not_negative(kind):
    motor = Motor(_params())
    assert motor.set_param(kind, 0.0) is True
    assert motor.get_param(kind) == 0.0
    with pytest.raises(ValueError):
        motor.set_param(kind, -0.5)


def test_get_state_param_raises():
    with pytest.raises(ValueError):
        Motor().get_param(MotorParam.STATE)


def test_unknown_kind_raises():
    with pytest.raises(ValueError):
        Motor().get_param("jm")


def test_calculate_without_inertia_raises():
    with pytest.raises(ValueError):
        Motor().calculate(0.0, 1.0)


def test_balanced_load_gives_zero_first_speed():
    params = _params()
    motor = Motor(params)
    motor.calculate(0.75 * params.pn * params.phif, 1.0)
    assert motor.speed == pytest.approx(0.0, abs=1e-12)
    assert motor.angle == pytest.approx(0.0, abs=1e-12)


def test_calculate_is_deterministic():
    first, second = Motor(_params()), Motor(_params())
    for _ in range(50):
        first.calculate(0.0, 3.1415926)
        second.calculate(0.0, 3.1415926)
    assert first.speed == second.speed
    assert first.angle == second.angle
    assert first.state == second.state


def test_calculate_updates_state():
    motor = Motor(_params())
    motor.calculate(0.0, 1.0)
    assert motor.state.torque_state != 0.0
    assert motor.state.speed_state == motor.speed


def test_reset_state_restores_fresh_behaviour():
    used = Motor(_params())
    for _ in range(20):
        used.calculate(0.0, 2.0)
    used.reset_state()
    assert used.state == MotorState()
    fresh = Motor(_params())
    used.calculate(0.0, 2.0)
    fresh.calculate(0.0, 2.0)
    assert used.speed == fresh.speed
    assert used.angle == fresh.angle


def test_set_state_param_resets_state():
    motor = Motor(_params())
    motor.calculate(0.0, 1.0)
    assert motor.set_param(MotorParam.STATE) is True
    assert motor.state == MotorState()