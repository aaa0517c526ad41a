# akcompass

Pure-Python building blocks for an electronic compass built around the
AK8963 three-axis magnetometer and an accelerometer. The package has no
dependencies outside the standard library.

## What is in it

- `akcompass.vector`: the mutable `Vec3` type, the `Layout` enum of the
  eight mounting patterns and `rotate(layout, vec)`, which returns a vector
  transformed from the chip's frame to the device's. `init_buffer(size)`
  makes a list of vectors set to the "unset" marker (`Vec3.initial()`,
  tested with `Vec3.is_initial()`), and `buf_shift(buffer, shift)` moves the
  contents towards the end in place. Errors are raised as `CompassError`.
- `akcompass.ak8963`: chip constants (`Mode`, `Register`, `SensorFlag`),
  `status_error(status)` for the combined ST1/ST2 status, `convert_raw(hi,
  low, asa)` for a signed reading with fuse-ROM sensitivity adjustment, and
  `decompose(mag, status, asa, buffer)`, which pushes an adjusted sample onto
  the front of a buffer.
- `akcompass.vnorm`: `normalize_into(raw, nbuf, offset, sensitivity, target,
  buffer)` subtracts an offset, scales to a target sensitivity and stores the
  result at the front of a buffer; `buffer_average(buffer, nave)` averages
  the newest entries, stopping at the first unset one.
- `akcompass.direction`: `direction(hvec, hnave, avec, anave)` averages the
  magnetic and acceleration buffers and returns an `Orientation` with
  azimuth (0 to 360), pitch and roll in degrees.
- `akcompass.aoc`: `AocState` collects magnetic samples through
  `update(hdata)`, fits a sphere through four well-spread samples and returns
  an offset once the last four sphere centres lie close together; otherwise
  it returns `None`. `reset()` clears it.
- `akcompass.fileio`: `load_parameters(path)` and `save_parameters(path,
  offset)` read and write the offset file, three lines `HO.x = …`,
  `HO.y = …`, `HO.z = …` in that order.
- `akcompass.measure`: `calc_sleep(end_ns, start_ns, minimum_ns)` and
  `get_interval(delays)` for loop timing, `SensorData` and
  `output_buffer(flag, acc, mag, ori)` for the 12-value integer result,
  `raw_to_magnetic(data)` for the 8-byte ST1..ST2 register block and
  `evaluate_self_test(data, asa)`, which returns the adjusted reading or
  raises `CompassError` when an axis is out of range.
- `akcompass.display`: `start_message()` and `end_message(ret)` log and
  return their text, `format_result(buf)` renders a result buffer,
  `parse_menu_choice(text)` and `menu_main(stdin, stdout)` handle the text
  menu and return a `MenuMode`.
- `akcompass.options`: `parse_options(argv, driver_layout)` reads `-m N`
  (layout), `-s` (console mode) and `-z N` (debug zone) into `Options`;
  `ExitCode` lists the daemon's exit values.

## Installation

```
pip install .
```

## Example

```python
from akcompass.aoc import AocState
from akcompass.direction import direction
from akcompass.fileio import load_parameters, save_parameters
from akcompass.options import parse_options
from akcompass.vector import Layout, Vec3, rotate

options = parse_options(["-m", "2", "-s"])
print(options.layout, options.console)      # Layout.PAT2 True

reading = rotate(options.layout, Vec3(10.0, 20.0, -30.0))

state = AocState()
for sample in samples:          # a sequence of Vec3 magnetic readings
    offset = state.update(sample)
    if offset is not None:
        save_parameters("akmdfs.txt", offset)

offset = load_parameters("akmdfs.txt")

mag = [Vec3(0.0, 30.0, -40.0)] * 4
acc = [Vec3(0.0, 0.0, 9.8)] * 4
orientation = direction(mag, 4, acc, 4)
print(orientation.azimuth, orientation.pitch, orientation.roll)
```

Functions raise `akcompass.vector.CompassError` when their arguments are out
of range or a computation cannot be carried out.

## What it does not do

The package does not talk to a sensor: it opens no device, reads no
registers and runs no measurement loop or background daemon, and it installs
no command. The functions above work on values that the caller obtains and
passes in, such as register bytes, per-sensor delays and a layout number.

## Running the tests

```
pip install .[test]
pytest
```