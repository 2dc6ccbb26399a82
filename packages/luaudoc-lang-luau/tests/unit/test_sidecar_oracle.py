from pathlib import Path
from textwrap import dedent

from luaudoc.lang.luau.oracle import CachingTypeOracle, SidecarTypeOracle
from luaudoc.spec import RenderedType


def _write_sidecar(tmp_path: Path) -> Path:
    path = tmp_path / "types.yaml"
    path.write_text(
        dedent("""
        Signal.Fire:
          display: "(self: Signal, value: number) -> ()"
          method_display: "(value: number) -> ()"
          self: true
          params:
            - name: self
              type: Signal
            - name: value
              type: number
          returns: []
        Signal.name: string
        add:
          display: "(a: number, b: number) -> number"
          params:
            - {name: a, type: number}
            - {name: b, type: number}
          returns: [number]
        """),
        encoding="utf-8",
    )
    return path


def test_resolves_by_dotted_path(tmp_path: Path):
    oracle = SidecarTypeOracle.from_file(_write_sidecar(tmp_path))

    add = oracle.resolve([], "add")
    assert add.is_function
    assert add.params == [("a", "number"), ("b", "number")]
    assert add.returns == ["number"]

    prop = oracle.resolve(["Signal"], "name")
    assert prop == RenderedType(display="string")

    assert oracle.resolve(["Signal"], "missing") is None


def test_method_view_elides_self(tmp_path: Path):
    oracle = SidecarTypeOracle.from_file(_write_sidecar(tmp_path))

    fire = oracle.resolve(["Signal"], "Fire").as_method()

    assert fire.display == "(value: number) -> ()"
    assert fire.params == [("value", "number")]
    assert fire.returns == []


def test_missing_or_malformed_sidecar_is_empty(tmp_path: Path):
    assert len(SidecarTypeOracle.from_file(tmp_path / "nope.yaml")) == 0

    broken = tmp_path / "broken.yaml"
    broken.write_text("key: [unclosed", encoding="utf-8")
    assert len(SidecarTypeOracle.from_file(broken)) == 0


class CountingOracle:
    def __init__(self):
        self.calls = 0

    def resolve(self, owner_path, member_name):
        self.calls += 1
        return RenderedType(display=member_name)


def test_caching_oracle_memoises_lookups():
    inner = CountingOracle()
    oracle = CachingTypeOracle(inner)

    first = oracle.resolve(["A"], "b")
    second = oracle.resolve(("A",), "b")
    oracle.resolve(["A"], "c")

    assert first is second
    assert inner.calls == 2
