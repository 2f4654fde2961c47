"""
Menu-driven console for the hospital care records.

Loads the four record files on start, then hands each menu choice to
HospitalCareSystem, which saves the affected file after every change.

Usage:
    python hospital_console.py
    python hospital_console.py --data-dir ./ward_a --debug
"""
import argparse
import logging
from typing import Optional

from hospital_care import HospitalCareSystem
from hospital_config import LINE_WIDTH, LOG_FORMAT, LOG_DATEFMT, PRIORITY_MIN, PRIORITY_MAX

logger = logging.getLogger(__name__)


# ---------- Input / output helpers ----------
def line(ch: str = '-', n: int = LINE_WIDTH):
    print(ch * n)


def ask(prompt: str) -> str:
    # EOFError propagates; main() treats it as exit
    return input(prompt).rstrip('\r\n')


def ask_int(prompt: str, retry: str = "Invalid input. Please enter a number.") -> int:
    while True:
        raw = ask(prompt).strip()
        try:
            return int(raw)
        except ValueError:
            print(retry)


def ask_choice(prompt: str) -> Optional[int]:
    """Menu choice; None for anything that is not a number."""
    try:
        return int(ask(prompt).strip())
    except ValueError:
        return None


def header(title: str):
    line('=')
    print(title)
    line('=')


# ---------- Role 1: Patient admission (queue) ----------
def show_patients(system: HospitalCareSystem):
    if system.patients.is_empty():
        print("No patients waiting.")
        return
    print(f"{'ID':<12}{'Name':<22}Condition")
    line()
    for p in system.patients.traverse():
        print(f"{p.id:<12}{p.name:<22}{p.condition}")
    print(f"Total waiting: {len(system.patients)}")


def admit_patient(system: HospitalCareSystem):
    if system.patients.is_full():
        print("Patient queue is full.")
        return
    pid = ask("Enter Patient ID (e.g., P0028): ")
    name = ask("Enter Patient Name: ")
    condition = ask("Enter Condition Type (e.g., Flu/Checkup): ")
    if system.admit_patient(pid, name, condition):
        print("Admitted to queue.")
    else:
        print("Failed to admit (ensure ID/Name not empty and queue not full).")


def discharge_patient(system: HospitalCareSystem):
    p = system.discharge_patient()
    if p:
        print(f"Discharged earliest admitted patient: [{p.id}] {p.name} ({p.condition})")
    else:
        print("No patients to discharge.")


def menu_patients(system: HospitalCareSystem):
    while True:
        header("PATIENT ADMISSION CLERK (Queue)")
        print("1) Admit Patient")
        print("2) Discharge Patient (earliest)")
        print("3) View Patient Queue")
        print("0) Back")
        ch = ask_choice("> ")
        if ch == 0:
            break
        elif ch == 1:
            admit_patient(system)
        elif ch == 2:
            discharge_patient(system)
        elif ch == 3:
            show_patients(system)
        else:
            print("Invalid choice.")


# ---------- Role 2: Medical supplies (stack) ----------
def show_supplies(system: HospitalCareSystem):
    if system.supplies.is_empty():
        print("No supplies available.")
        return
    print(f"{'Type':<16}{'Qty':<10}Batch")
    line()
    for s in system.supplies.traverse():
        print(f"{s.type:<16}{s.quantity:<10}{s.batch}")
    print(f"Total batches: {len(system.supplies)}")


def add_supply(system: HospitalCareSystem):
    if system.supplies.is_full():
        print("Supply store is full.")
        return
    supply_type = ask("Enter Supply Type: ")
    while True:
        qty = ask_int("Enter Quantity (>= 1): ")
        if qty >= 1:
            break
        print("Quantity must be at least 1. Please try again.")
    batch = ask("Enter Batch: ")
    if system.add_supply(supply_type, qty, batch):
        print("Recorded (stack top).")
    else:
        print("Failed to add supply.")


def use_supply_by_type(system: HospitalCareSystem):
    types = system.supplies.distinct_types()
    if not types:
        print("No supplies to use.")
        return
    print("Available supply types:")
    for i, t in enumerate(types, start=1):
        print(f"  {i}) {t}")
    while True:
        choice = ask_int(f"Choose a type (1-{len(types)}): ")
        if 1 <= choice <= len(types):
            break
        print("Choice out of range. Try again.")
    used = system.use_supply(types[choice - 1])
    if used:
        print(f"Using supply: {used.type} x{used.quantity} (Batch: {used.batch})")
    else:
        print("No batch of that type is left.")


def menu_supplies(system: HospitalCareSystem):
    while True:
        header("MEDICAL SUPPLY MANAGER (Stack)")
        print("1) Add Supply Stock (push)")
        print("2) Use Supply by Type (last batch of that type)")
        print("3) View Current Supplies")
        print("0) Back")
        ch = ask_choice("> ")
        if ch == 0:
            break
        elif ch == 1:
            add_supply(system)
        elif ch == 2:
            use_supply_by_type(system)
        elif ch == 3:
            show_supplies(system)
        else:
            print("Invalid choice.")


# ---------- Role 3: Emergency department (max-heap) ----------
def show_emergencies(system: HospitalCareSystem):
    if system.emergencies.is_empty():
        print("No emergency cases pending.")
        return
    print(f"{'Patient':<22}{'Emergency':<18}Priority")
    line()
    for e in system.emergencies.traverse():
        print(f"{e.patient:<22}{e.type:<18}{e.priority}")
    print("(Highest priority case is always processed first.)")


def log_emergency(system: HospitalCareSystem):
    if system.emergencies.is_full():
        print("Emergency list full.")
        return
    patient = ask("Patient Name: ")
    emergency_type = ask("Type of Emergency: ")
    priority = ask_int(
        f"Priority Level ({PRIORITY_MIN}-{PRIORITY_MAX}, higher is more critical): ",
        retry="Enter a valid number for priority.",
    )
    if system.log_emergency(patient, emergency_type, priority):
        print("Emergency logged.")
    else:
        print("Emergency list full.")


def process_most_critical(system: HospitalCareSystem):
    e = system.process_most_critical()
    if e:
        print(f"ATTEND MOST CRITICAL => {e.patient} ({e.type}) with priority {e.priority}")
    else:
        print("No emergencies in queue.")


def menu_emergency(system: HospitalCareSystem):
    while True:
        header("EMERGENCY DEPT OFFICER (Priority Queue - Max Heap)")
        print("1) Log Emergency Case (push)")
        print("2) Process Most Critical Case (pop-max)")
        print("3) View Pending Emergency Cases")
        print("0) Back")
        ch = ask_choice("> ")
        if ch == 0:
            break
        elif ch == 1:
            log_emergency(system)
        elif ch == 2:
            process_most_critical(system)
        elif ch == 3:
            show_emergencies(system)
        else:
            print("Invalid choice.")


# ---------- Role 4: Ambulance dispatcher (circular queue) ----------
def show_ambulances(system: HospitalCareSystem):
    if system.ambulances.is_empty():
        print("No ambulances registered.")
        return
    print("Rotation Order (head -> tail):")
    line()
    for i, a in enumerate(system.ambulances.traverse(), start=1):
        print(f"{i}. {a.plate}")


def register_ambulance(system: HospitalCareSystem):
    if system.ambulances.is_full():
        print("Ambulance roster full.")
        return
    plate = ask("Enter Ambulance Plate/ID: ")
    if system.register_ambulance(plate):
        print("Ambulance added to active-duty list.")
    else:
        print("Failed to register.")


def rotate_shift(system: HospitalCareSystem):
    head = system.rotate_shift()
    if head:
        print(f"Shift rotated. Next up is now {head.plate}.")
    else:
        print("No ambulances to rotate.")


def dispatch_ambulance(system: HospitalCareSystem):
    a = system.dispatch_ambulance()
    if a:
        print(f"Released {a.plate} from the active-duty list.")
    else:
        print("No ambulances registered.")


def menu_ambulance(system: HospitalCareSystem):
    while True:
        header("AMBULANCE DISPATCHER (Circular Queue)")
        print("1) Register Ambulance (enqueue)")
        print("2) Rotate Ambulance Shift")
        print("3) Display Ambulance Schedule")
        print("4) Release Next Ambulance (dequeue)")
        print("0) Back")
        ch = ask_choice("> ")
        if ch == 0:
            break
        elif ch == 1:
            register_ambulance(system)
        elif ch == 2:
            rotate_shift(system)
        elif ch == 3:
            show_ambulances(system)
        elif ch == 4:
            dispatch_ambulance(system)
        else:
            print("Invalid choice.")


# ---------- Main menu ----------
MENUS = {
    1: menu_patients,
    2: menu_supplies,
    3: menu_emergency,
    4: menu_ambulance,
}


def run(system: HospitalCareSystem):
    while True:
        header("HOSPITAL PATIENT CARE MANAGEMENT SYSTEM")
        print("1) Patient Admission Clerk (Queue)")
        print("2) Medical Supply Manager (Stack)")
        print("3) Emergency Dept Officer (Priority Queue)")
        print("4) Ambulance Dispatcher (Circular Queue)")
        print("0) Exit")
        ch = ask_choice("> ")
        if ch == 0:
            print("Goodbye!")
            return
        menu = MENUS.get(ch)
        if menu:
            menu(system)
        else:
            print("Invalid choice.")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Hospital patient care records console')
    parser.add_argument('--data-dir', default='.', help='Directory holding the record files (default: .)')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    system = HospitalCareSystem(data_dir=args.data_dir)
    system.load_all()
    logger.debug("Record counts at start: %s", system.report_counts())
    try:
        run(system)
    except (EOFError, KeyboardInterrupt):
        print()
        print("Goodbye!")


if __name__ == '__main__':
    main()
