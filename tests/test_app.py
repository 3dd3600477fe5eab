from pathlib import Path

from streamlit.testing.v1 import AppTest


APP = Path(__file__).resolve().parents[1] / "app.py"


def _button(at, label):
    return next(b for b in at.button if b.label == label)


def test_app_renders():
    at = AppTest.from_file(str(APP), default_timeout=120).run()
    assert not at.exception


def test_app_prices_option():
    at = AppTest.from_file(str(APP), default_timeout=120).run()
    _button(at, "Price Option (Monte Carlo + Black–Scholes)").click().run()

    assert not at.exception
    assert len(at.error) == 0
    assert len(at.metric) == 4


def test_app_solves_reference_put_without_bound_warning():
    at = AppTest.from_file(str(APP), default_timeout=120).run()
    _button(at, "Solve IV").click().run()

    assert not at.exception
    assert len(at.error) == 0
    assert at.metric[0].value.endswith("%")
    assert len(at.warning) == 0
