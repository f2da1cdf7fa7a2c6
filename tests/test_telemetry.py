import pytest

from markdown_engine.runtime import telemetry


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError, match="Unknown preset"):
        telemetry.configure(preset="verbose")


def test_span_reraises_block_errors() -> None:
    with pytest.raises(RuntimeError, match="boom"):
        with telemetry.span("test::span", component="tests", metadata={"k": 1}) as handle:
            handle.add_metadata("step", 2)
            assert handle.metadata == {"k": "1", "step": "2"}
            raise RuntimeError("boom")
