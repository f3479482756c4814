import numpy as np

import ndview

# Eight samples of a 4x4 image, with the sample axis vectorized. Indexing only
# sees the image axes; every result still carries all eight samples.
images = ndview.tensor(
    np.random.default_rng(0).normal(size=(8, 4, 4)),
    names=["row", "col"],
    vectorized_axes=["sample"],
)
print("logical shape:", images.shape, "vectorized:", images.vectorized_axes)

centre = images[[("row", ndview.Range(1, 2)), ("col", ndview.Range(1, 2))]]
print("centre:", centre.shape, "physical:", centre.physical_shape)

pixel = images[[("row", 0), ("col", ndview.tensor(np.int64(3)))]]
print("pixel per sample:", pixel.to_numpy().round(3))
