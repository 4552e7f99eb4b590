# Generic imports
import matplotlib
matplotlib.use("Agg")
import pytest

# Custom imports
from chiflow.app.app import *
from chiflow.app.run import main

def test_registered_apps():
    assert sorted(app_factory.keys) == ["living_room", "studio"]
    with pytest.raises(KeyError):
        app_factory.create("kitchen")

@pytest.mark.parametrize("name", ["studio", "living_room"])
def test_app_runs_headless(name):
    app = app_factory.create(name)
    app.nx        = 60
    app.ny        = 60
    app.nt        = 3
    app.n_parts   = 50
    app.seed      = 0
    app.plot_freq = 1
    app.plot_show = False
    app.run()

    assert app.it == 3
    assert app.sim.closed
    assert app.sim.grid.get_max_speed() > 0.0
    assert app.sim.particles.count == 50

def test_runner_saves_frames(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    main(["studio", "--steps", "2", "--png", "--seed", "1"])

    assert (tmp_path / "studio_00002.png").exists()
