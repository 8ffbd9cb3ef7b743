"""
E2E test: pykzg.example demo runs and every check passes.
"""

import pytest

from pykzg.example import main


@pytest.mark.parametrize("curve", ["bn128", None])
def test_demo(curve, capsys):
    assert main(curve) is True
    out = capsys.readouterr().out
    assert "p(7) = 611" in out
    assert "모든 검사 통과" in out
