import pytest
import hospital_console
from hospital_care import HospitalCareSystem


def feed(monkeypatch, *answers):
    it = iter(answers)

    def fake_input(prompt=''):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    monkeypatch.setattr('builtins.input', fake_input)


def test_admit_and_view_patients(tmp_path, monkeypatch, capsys):
    feed(monkeypatch,
         "1",                                  # patients menu
         "1", "A01", "Alice", "Flu",           # admit
         "x",                                  # invalid choice
         "3",                                  # view
         "0", "0")
    hospital_console.main(["--data-dir", str(tmp_path)])
    out = capsys.readouterr().out
    assert "Admitted to queue." in out
    assert "Invalid choice." in out
    assert "Total waiting: 1" in out
    assert "Goodbye!" in out
    assert (tmp_path / "patients.txt").read_text() == "A01\nAlice\nFlu\n"


def test_supply_quantity_is_reasked(tmp_path, monkeypatch, capsys):
    system = HospitalCareSystem(data_dir=str(tmp_path))
    feed(monkeypatch, "Gauze", "many", "0", "12", "G-1")
    hospital_console.add_supply(system)
    out = capsys.readouterr().out
    assert "Invalid input. Please enter a number." in out
    assert "Quantity must be at least 1." in out
    assert system.supplies.peek().quantity == 12


def test_use_supply_by_type_picks_from_list(tmp_path, monkeypatch, capsys):
    system = HospitalCareSystem(data_dir=str(tmp_path))
    system.add_supply("Gauze", 10, "G-1")
    system.add_supply("Saline", 5, "S-1")
    system.add_supply("Gauze", 20, "G-2")
    feed(monkeypatch, "9", "1")
    hospital_console.use_supply_by_type(system)
    out = capsys.readouterr().out
    assert "1) Gauze" in out and "2) Saline" in out
    assert "Choice out of range." in out
    assert "Using supply: Gauze x20 (Batch: G-2)" in out
    assert [s.batch for s in system.supplies.traverse()] == ["S-1", "G-1"]


def test_emergency_priority_is_clamped_from_prompt(tmp_path, monkeypatch, capsys):
    system = HospitalCareSystem(data_dir=str(tmp_path))
    feed(monkeypatch, "Y", "Cardiac", "high", "150")
    hospital_console.log_emergency(system)
    hospital_console.process_most_critical(system)
    out = capsys.readouterr().out
    assert "Enter a valid number for priority." in out
    assert "ATTEND MOST CRITICAL => Y (Cardiac) with priority 100" in out


def test_rotate_and_release_ambulances(tmp_path, monkeypatch, capsys):
    system = HospitalCareSystem(data_dir=str(tmp_path))
    hospital_console.rotate_shift(system)
    system.register_ambulance("AMB-1")
    system.register_ambulance("AMB-2")
    hospital_console.rotate_shift(system)
    hospital_console.show_ambulances(system)
    hospital_console.dispatch_ambulance(system)
    out = capsys.readouterr().out
    assert "No ambulances to rotate." in out
    assert "Next up is now AMB-2." in out
    assert "1. AMB-2\n2. AMB-1" in out
    assert "Released AMB-2" in out


def test_state_survives_restart(tmp_path, monkeypatch, capsys):
    feed(monkeypatch, "4", "1", "AMB-7", "0", "0")
    hospital_console.main(["--data-dir", str(tmp_path)])
    feed(monkeypatch, "4", "3", "0", "0")
    hospital_console.main(["--data-dir", str(tmp_path)])
    assert "1. AMB-7" in capsys.readouterr().out


@pytest.mark.parametrize("answers", [(), ("1",), ("2", "1", "Gauze")])
def test_eof_exits_cleanly(tmp_path, monkeypatch, capsys, answers):
    feed(monkeypatch, *answers)
    hospital_console.main(["--data-dir", str(tmp_path)])
    assert "Goodbye!" in capsys.readouterr().out
