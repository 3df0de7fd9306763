import runpy


def test_python_m_entrypoint_calls_cli_main(monkeypatch) -> None:
    import bench_index.cli as cli_mod

    called = {"count": 0}

    def _fake_main() -> None:
        called["count"] += 1

    monkeypatch.setattr(cli_mod, "main", _fake_main)

    runpy.run_module("bench_index", run_name="__main__")
    assert called["count"] == 1
