import pytest

from ndview import IndexingConfig


def test_indexing_config_defaults():
    cfg = IndexingConfig().normalized()
    assert cfg.dynamic_index == "clamp"
    assert cfg.validate_backend_output is True
    assert cfg.default_backend == "numpy"


def test_indexing_config_normalization():
    cfg = IndexingConfig(dynamic_index="STRICT", validate_backend_output=0, default_backend=" Jax ")
    cfg = cfg.normalized()
    assert cfg.dynamic_index == "strict"
    assert cfg.validate_backend_output is False
    assert cfg.default_backend == "jax"


def test_indexing_config_rejects_unknown_values():
    with pytest.raises(ValueError, match="Unsupported dynamic index mode: wrap"):
        IndexingConfig(dynamic_index="wrap").normalized()
    with pytest.raises(ValueError, match="Unsupported default backend: tpu"):
        IndexingConfig(default_backend="tpu").normalized()
