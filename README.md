# partnest

`partnest` is the groundwork for arranging polygonal parts to be cut from
sheets. A genetic algorithm evolves the order and rotation in which copies of
the parts are placed. The best individual of each generation is reported
through a callback.

## Modules

- **`partnest.job`** holds the job data.
  - `Input`, `Part`, `Sheet` and `Coord` describe a job. Use
    `Input.from_json` or `Input.from_dict` to read one. A missing or
    wrongly typed field raises `ValueError`.
  - `Update`, `GenerationResult`, `Placement` and `JobError` are what a job
    reports. `Update.to_json()` gives compact JSON. Enum members are written
    as their names (`"Running"`, `"InvalidInput"`, ...), and each entry of
    `placements_and_location` is a `[placement, location]` pair.
  - `Status` and `ErrorType` are the enumerations used in updates.
- **`partnest.nest_polygon`** holds the polygon code.
  - `NestPolygon` closes a contour and orients it counter-clockwise. It
    records the edge slopes, whether the polygon is convex, the bounding box
    (`minx`, `maxx`, `miny`, `maxy`) and the bottom-left vertex.
  - `translate(dx, dy)` returns a moved copy.
  - `minkowski_sum(other)` builds the no-fit polygon of `other` moving
    around a convex polygon.
  - `render_png(polygons)` draws polygon outlines into a PNG and returns its
    bytes.
  - `draw(polygons)` prints that image inline, using the iTerm image escape
    sequence.
  - `demo()` slides one polygon around another along their no-fit polygon
    and draws every step.
- **`partnest.packing`** holds `PlacementSequence`, one individual, and
  `PackingResult`, which is what `PlacementSequence.pack()` returns.
- **`partnest.genetic_algorithm`** holds `Population`.
  - It starts with two individuals.
  - Each step of iteration works in this order:
    1. It packs every individual and sorts them by fitness.
    2. It breeds the next generation with crossover (`mate`) and mutation
       (`mutate`). Mutation swaps neighbouring placements and changes
       rotations.
    3. It yields a `GenerationResult`.
  - Iteration stops once the best fitness has not improved for six
    generations.
  - You can pass a `random.Random` to `Population` to make a run
    reproducible.
  - `random_weighted_index` chooses parents, giving more weight to the low
    indices.
- **`partnest.nesting_runner`** holds `NestPart` and `NestingRunner`.
  `NestingRunner` builds the population for one job and runs it until it
  stops.
- **`partnest.worker`** holds `JobWorker`. It parses JSON jobs and runs them
  one at a time, in order, on a background thread.

## Input format

A job is a JSON object:

```json
{
  "nesting_job_ulid": "01JOBEXAMPLE0000000000000",
  "parts": [
    {"quantity": 2, "contour": [{"x": 0, "y": 0}, {"x": 10, "y": 0}, {"x": 10, "y": 5}], "rotations": [0, 90, 180, 270]},
    {"quantity": 1, "contour": [{"x": 0, "y": 0}, {"x": 4, "y": 0}, {"x": 4, "y": 4}, {"x": 0, "y": 4}], "rotations": [0, 90]}
  ],
  "sheets": [{"length": 100.0, "width": 50.0, "cost": 1.0}],
  "tool_diameter": 2.0,
  "timeout": 60
}
```

A job must contain at least two parts. Each part should list at least two
rotations, because mutation picks a different one from the list.

## Running a job directly

```python
from partnest.job import Input
from partnest.nesting_runner import NestingRunner

with open("job.json") as f:
    job = Input.from_json(f.read())

def on_update(update):
    print(update.to_json())

NestingRunner(job, on_update).start()
```

The callback gets one `Update` with status `Running` for each generation.
After the search stops, it gets a final update with status `Done`.

## Running jobs in the background

```python
from partnest.worker import JobWorker

with open("job.json") as f:
    payload = f.read()

with JobWorker() as worker:
    worker.add_job(payload, print)   # updates arrive as JSON text
```

`add_job` parses the payload straight away and raises `ValueError` if it is
malformed.

If a job cannot be set up, the callback gets a single `Failed` update with
error type `InvalidInput`. Having fewer than two parts is one such case.

`stop()`, which is also called when the `with` block ends, does two things:

- It lets the jobs already queued finish.
- It ends the thread.

Adding a job after that raises `RuntimeError`.

The module-level `init()` starts a shared worker, replacing any earlier one.
`add_job(payload, update_callback)` queues a job on it. If `init()` has not
been called, it only validates the payload.

## No-fit polygons

```python
from partnest.nest_polygon import NestPolygon, render_png

square = NestPolygon([(20, 20), (20, 40), (40, 40), (40, 20)])
diamond = NestPolygon([(20, 20), (30, 30), (20, 40), (10, 30)])
nfp = square.minkowski_sum(diamond)

png_bytes = render_png([square, diamond, nfp])
```

`minkowski_sum` raises `ValueError` when the polygon it is called on is
concave.

## What it does not do

- **Packing is a stand-in.** `PlacementSequence.pack()` always returns the
  same fitness and puts every placement at the origin, so no real layout on
  a sheet is produced.
- **Several job fields are not used.** The sheets, tool diameter and timeout
  are read but play no part in the search.
- **Result fields are fixed values.** Every `GenerationResult` has a sheet
  count of 1, a left-over of 0 and a cut-loss ratio of 0.7.
- **The final update has no solution.** The `Done` update always carries an
  empty `nesting_solution`.
- **Concave polygons are not handled.** No-fit polygons can only be built
  around convex polygons.
- **There is no command-line program.**