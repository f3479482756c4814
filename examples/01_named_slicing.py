import numpy as np

import ndview
from ndview import Range

# A (time, sensor, channel) recording with named axes.
recording = ndview.tensor(
    np.arange(3 * 4 * 5, dtype=np.float32).reshape(3, 4, 5),
    names=["time", "sensor", "channel"],
)

# Sensors 1 and 2 at every time step; the sensor axis is kept.
pair = recording[[("sensor", Range(1, 2))]]
print("sensor pair:", pair.shape, pair.names)

# The last channel of the first time step; both indexed axes are squeezed.
trace = recording[0, Range(0, -1), -1]
print("trace:", trace.shape, trace.names, trace.to_numpy())

# The same selection written as text, as the CLI accepts it.
same = ndview.get(recording, ndview.parse_index("[time: 0, channel: -1]"))
assert np.array_equal(same.to_numpy(), trace.to_numpy())
