# rcwssim

A small simulator of the servo drives of a two-axis stabilised mount. The
electro-optical director (azimuth and elevation axes) is modelled by two
discrete motor models, each with a PI speed loop; its angles are published to
subscribers and sent out as binary feedback datagrams over UDP.

## Running

    rcwssim [--remote-address ADDR] [--remote-port PORT]
            [--local-host HOST] [--local-port PORT] [--duration SECONDS]

The command starts a simulation thread and a UDP receiver thread and starts
the simulation at once. Each cycle runs ten motor samples on both director
axes with a speed request of 3.1415926 rad/s and no load torque, then waits
10 ms and sends a `FeedbackMessage` to the remote endpoint (default
`192.168.88.128:60000`). The receiver listens on `0.0.0.0:60001` by default.

Without `--duration` it runs until interrupted (Ctrl-C). When it stops it
prints the director's last azimuth and elevation angles (degrees) and speeds
(rpm).

## Modules

- `rcwssim.units` – unit conversions and axis limits:
  `angle_rad_to_deg`, `angle_deg_to_rad`, `angle_code_to_deg`,
  `angle_deg_to_code`, `wrap_azimuth`, `clamp_elevation`,
  `speed_rads_to_rpm`, `speed_rpm_to_rads`, `limit_azimuth_speed`,
  `limit_elevation_speed`.
- `rcwssim.messages` – little-endian wire records, each with `pack()` and the
  class method `unpack(data)` (which raises `ValueError` on a wrong length):
  `ServoCommand`, `ServoFeedback`, `AxisPairCommand`, `AxisPairFeedback`,
  `ControlMessage` (host to simulator) and `FeedbackMessage` (simulator to
  host). Each servo record is four bytes: a 16-bit value, a byte of flag bits
  and a padding byte.
- `rcwssim.motor` – `Motor`, with `MotorParameters`, `MotorState` and the
  `MotorParam` selector. `Motor.calculate(load_torque, speed_ref)` advances
  the model by one sample and updates `speed` (rad/s) and `angle` (rad);
  `set_param` returns whether the value changed and raises `ValueError` for a
  value the parameter cannot take; `get_param` reads a scalar parameter;
  `reset_state` clears the internal state.
- `rcwssim.ofd` – `Ofd`, the director with `azi_motor` and `hgh_motor`;
  `Ofd.calculate(azi_torque, azi_speed, hgh_torque, hgh_speed)` advances both
  axes and folds both angles into -pi..pi.
- `rcwssim.net` – `NetSender` (`send`, `close`) and `NetReceiver` (`start`,
  `receive_pending`, `parse`, `request_pause`, `request_resume`, `close`),
  plus `RunState`. The receiver starts paused; reading blocks while paused.
  Both are context managers.
- `rcwssim.simulation` – `Simulation`, with `step`, `fill_message`, `run`,
  `request_pause`, `request_resume` and `stop`. It starts paused.
- `rcwssim.core` – `Rcws`, which owns the simulation and receiver threads
  (`start_threads`, `shutdown`) and holds the station values as properties:
  `gun_azi_angle`, `gun_hgh_angle`, `ofd_azi_angle`, `ofd_hgh_angle` (degrees),
  `gun_azi_speed`, `gun_hgh_speed`, `ofd_azi_speed`, `ofd_hgh_speed` (rpm) and
  `is_started`. `Rcws.subscribe(name, callback)` registers a no-argument
  callback run when a property changes; setting `is_started` resumes or
  pauses the simulation. `main(argv=None)` is the command above.

## Unit conversions

Angles on the wire are 16-bit codes: the top bit is the sign and the lower
fifteen bits the magnitude, scaled so that 32768 corresponds to 180°.

```python
from rcwssim.units import angle_deg_to_code, speed_rads_to_rpm, wrap_azimuth

angle_deg_to_code(90.0)      # 16384
angle_deg_to_code(-90.0)     # 16384 | 0x8000
speed_rads_to_rpm(3.1415926) # about 30 rpm
wrap_azimuth(4.0)            # about -2.283 rad
```

`limit_azimuth_speed` caps a speed at ±1.745 rad/s. The elevation speed
limit is configured as 0.0 rad/s, so `limit_elevation_speed` returns ±0.0 for
any non-zero speed. `clamp_elevation` keeps an angle between -0.175 rad and
0.873 rad.

## What it does not do

- There is no graphical display; state is available only through `Rcws`
  properties, subscriptions and the summary the command prints.
- Only the electro-optical director is simulated. The gun values stay at
  zero and the gun records in each feedback message are all zero.
- Received datagrams are logged and handed to the receiver's `on_data`
  callback, but nothing applies them to the model: the speed requests are
  fixed, and the command sets no `on_data` callback.
- The director's elevation angle is wrapped like azimuth, not clamped to its
  mechanical limits.

## Tests

The tests use pytest and live in `tests/`; install the `test` extra to get it.