"""Cross-implementation verification runner."""

from __future__ import annotations

from game_of_life.config import DEFAULT_IMPLEMENTATIONS, ImplementationConfig, VerifyConfig
from game_of_life.model import Model
from game_of_life.verify import VerificationRunner, generate_pattern


class DriftingModel(Model):
    """Agrees with Model until generation 3, then flips a cell."""

    def next(self):
        changes = super().next()
        if self.generation == 3:
            self._cells[0] ^= 1
        return changes


def test_generate_pattern_is_deterministic() -> None:
    assert generate_pattern(4, 5, seed=1) == generate_pattern(4, 5, seed=1)
    assert len(generate_pattern(4, 5, seed=1)) == 20


def test_default_implementations_agree(capsys) -> None:
    runner = VerificationRunner(VerifyConfig(rows=20, cols=24, generations=40, seed=3))
    assert runner.run(DEFAULT_IMPLEMENTATIONS)
    assert "ALL IMPLEMENTATIONS PRODUCE IDENTICAL RESULTS" in capsys.readouterr().out


def test_divergence_is_reported(capsys) -> None:
    drifting = ImplementationConfig("drifting", __name__, "DriftingModel")
    runner = VerificationRunner(VerifyConfig(rows=16, cols=16, generations=10, seed=5))
    assert not runner.run([DEFAULT_IMPLEMENTATIONS[0], drifting])
    assert runner.first_divergence("drifting", "python") == 4
    assert "MISMATCH" in capsys.readouterr().out


def test_failed_implementation_is_skipped(capsys) -> None:
    broken = ImplementationConfig("broken", "game_of_life.nowhere", "Model")
    runner = VerificationRunner(VerifyConfig(rows=4, cols=4, generations=2, seed=0))
    assert not runner.verify_impl(broken, generate_pattern(4, 4, 0))
    assert "FAILED" in capsys.readouterr().out
