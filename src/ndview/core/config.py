from __future__ import annotations

from dataclasses import dataclass, replace

DYNAMIC_INDEX_MODES = {"clamp", "strict"}
KNOWN_BACKENDS = {"numpy", "torch", "jax"}


@dataclass(frozen=True)
class IndexingConfig:
    """
    Switches shared by the indexing entry points and the bundled backends.

    Key behaviors:
    * ``dynamic_index`` controls how scalar-tensor indices are resolved at slice
      time. ``"clamp"`` pulls the start back into ``[0, dim - length]`` the way
      XLA dynamic slices do; ``"strict"`` raises ``OutOfBoundsIndexError``.
    * ``validate_backend_output`` checks that a backend returned a tensor whose
      shape matches the requested lengths.
    * ``default_backend`` is used by ``ndview.tensor`` when no backend is given.
    """

    dynamic_index: str = "clamp"  # "clamp" | "strict"
    validate_backend_output: bool = True
    default_backend: str = "numpy"  # "numpy" | "torch" | "jax"

    def normalized(self) -> "IndexingConfig":
        mode = (self.dynamic_index or "clamp").lower()
        if mode not in DYNAMIC_INDEX_MODES:
            raise ValueError(f"Unsupported dynamic index mode: {self.dynamic_index}")
        backend = (self.default_backend or "numpy").strip().lower()
        if backend not in KNOWN_BACKENDS:
            raise ValueError(f"Unsupported default backend: {self.default_backend}")
        return replace(
            self,
            dynamic_index=mode,
            validate_backend_output=bool(self.validate_backend_output),
            default_backend=backend,
        )
