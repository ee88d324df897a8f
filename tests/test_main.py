import main
from solution_converter import SolutionConverter


def test_main_runs_and_writes_solution(toy_file, toy_spec, tmp_path, capsys):
    output = tmp_path / "toy.sol"

    code = main.main([toy_file, "--output", str(output), "--seed", "3",
                      "--population", "4", "--generations", "2", "--log-level", "WARNING"])

    assert code == 0
    printed = capsys.readouterr().out
    assert "Conflicts: 0" in printed
    assert "Curriculum: Cur1" in printed

    converter = SolutionConverter(toy_spec)
    best = converter.read(str(output))
    assert best is not None, converter.get_error()
    assert len(best) == toy_spec.n_lectures


def test_main_reports_bad_instance(tmp_path):
    assert main.main([str(tmp_path / "missing.ectt"), "--log-level", "ERROR"]) == 1
