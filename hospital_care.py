
from dataclasses import dataclass
from typing import Optional, Any, Callable, Dict, Iterator, List
import logging
import os
import re

from hospital_config import (
    MAX_PATIENTS, MAX_SUPPLIES, MAX_EMERGENCIES, MAX_AMBULANCES,
    DATA_FILES, FIELD_LIMITS, PRIORITY_MIN, PRIORITY_MAX,
)

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r'[\r\n]')
_LEADING_INT = re.compile(r'\s*([+-]?\d+)')


# ---------- Field helpers ----------
def clip_text(value: Any, limit: int) -> str:
    """Keep the first line of ``value``, cut to ``limit`` UTF-8 bytes."""
    text = '' if value is None else str(value)
    text = _LINE_BREAK.split(text, 1)[0]
    raw = text.encode('utf-8')
    if len(raw) <= limit:
        return text
    # never split a multi-byte character
    return raw[:limit].decode('utf-8', 'ignore')


def parse_int(line: str) -> Optional[int]:
    """Leading integer of a line (sign allowed, trailing text ignored)."""
    m = _LEADING_INT.match(line)
    if not m:
        return None
    return int(m.group(1))


def clamp_priority(priority: int) -> int:
    if priority < PRIORITY_MIN:
        return PRIORITY_MIN
    if priority > PRIORITY_MAX:
        return PRIORITY_MAX
    return priority


# ---------- ADTs ----------
@dataclass
class Patient:
    id: str
    name: str
    condition: str = ''

    def __post_init__(self):
        self.id = clip_text(self.id, FIELD_LIMITS['patient_id'])
        self.name = clip_text(self.name, FIELD_LIMITS['patient_name'])
        self.condition = clip_text(self.condition, FIELD_LIMITS['condition'])

    def to_lines(self) -> List[str]:
        return [self.id, self.name, self.condition]

    @classmethod
    def from_lines(cls, lines: List[str]) -> 'Patient':
        return cls(lines[0], lines[1], lines[2])


@dataclass
class SupplyBatch:
    type: str
    quantity: int
    batch: str = ''

    def __post_init__(self):
        self.type = clip_text(self.type, FIELD_LIMITS['supply_type'])
        self.quantity = int(self.quantity)  # no clamping, no upper bound
        self.batch = clip_text(self.batch, FIELD_LIMITS['batch'])

    def to_lines(self) -> List[str]:
        return [self.type, str(self.quantity), self.batch]

    @classmethod
    def from_lines(cls, lines: List[str]) -> Optional['SupplyBatch']:
        qty = parse_int(lines[1])
        if qty is None:
            return None
        return cls(lines[0], qty, lines[2])


@dataclass
class EmergencyCase:
    patient: str
    type: str
    priority: int = PRIORITY_MIN  # higher = more critical

    def __post_init__(self):
        self.patient = clip_text(self.patient, FIELD_LIMITS['emergency_patient'])
        self.type = clip_text(self.type, FIELD_LIMITS['emergency_type'])
        self.priority = clamp_priority(int(self.priority))

    def to_lines(self) -> List[str]:
        return [self.patient, self.type, str(self.priority)]

    @classmethod
    def from_lines(cls, lines: List[str]) -> Optional['EmergencyCase']:
        prio = parse_int(lines[2])
        if prio is None:
            return None
        return cls(lines[0], lines[1], prio)


@dataclass
class Ambulance:
    plate: str

    def __post_init__(self):
        self.plate = clip_text(self.plate, FIELD_LIMITS['plate'])

    def to_lines(self) -> List[str]:
        return [self.plate]

    @classmethod
    def from_lines(cls, lines: List[str]) -> 'Ambulance':
        return cls(lines[0])


# ---------- Text storage ----------
def write_records(path: str, records) -> bool:
    """Rewrite ``path`` with one line per field of every record."""
    try:
        with open(path, 'w', encoding='utf-8', newline='\n') as fh:
            for rec in records:
                for line in rec.to_lines():
                    fh.write(line + '\n')
    except OSError as exc:
        logger.error("Cannot open %s for writing: %s", path, exc)
        return False
    return True


def _read_line(fh) -> Optional[str]:
    """Next line without its line break; None at end of file."""
    raw = fh.readline()
    if not raw:
        return None
    return raw.decode('utf-8').rstrip('\r\n')


def read_records(path: str, width: int,
                 build: Callable[[List[str]], Optional[Any]]) -> Iterator[Any]:
    """Yield records parsed from ``width``-line groups of ``path``.

    Blank lines where a record would start are skipped. A record cut short
    by end of file, one that is not valid UTF-8, or one that ``build``
    rejects ends the read; everything before it is kept. The caller checks
    that ``path`` exists.
    """
    try:
        with open(path, 'rb') as fh:
            while True:
                first = _read_line(fh)
                if first is None:
                    return
                if not first:
                    continue
                lines = [first]
                for _ in range(width - 1):
                    nxt = _read_line(fh)
                    if nxt is None:
                        logger.warning("%s ends mid-record; stopping load", path)
                        return
                    lines.append(nxt)
                rec = build(lines)
                if rec is None:
                    logger.warning("Unreadable record in %s; stopping load", path)
                    return
                yield rec
    except UnicodeDecodeError as exc:
        logger.warning("%s is not valid UTF-8 (%s); stopping load", path, exc)
    except OSError as exc:
        logger.warning("Cannot read %s: %s; stopping load", path, exc)


def load_records(container, path: str, width: int, build, insert, label: str) -> int:
    """Clear ``container`` and refill it from ``path`` through ``insert``."""
    container.clear()
    if not os.path.exists(path):
        logger.info("%s not found. Starting with empty %s.", path, label)
        return 0
    for rec in read_records(path, width, build):
        if container.is_full():
            logger.warning("%s full; ignoring the rest of %s", label, path)
            break
        if not insert(rec):
            logger.warning("Skipped invalid %s record from %s: %r", label, path, rec)
    logger.info("Loaded %s from %s (count=%d)", label, path, len(container))
    return len(container)


# ---------- Data Structures ----------
class CircularQueue:
    """Fixed-size circular queue over a preallocated list."""
    # enqueue/dequeue are O(1)
    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self.cap = capacity
        self.data: List[Any] = [None] * capacity
        self.head = 0
        self.tail = 0
        self.size = 0

    def accepts(self, item) -> bool:
        return True

    def enqueue(self, item) -> bool:
        if self.is_full() or not self.accepts(item):
            return False
        self.data[self.tail] = item
        self.tail = (self.tail + 1) % self.cap
        self.size += 1
        return True

    def dequeue(self):
        if self.size == 0:
            return None
        item = self.data[self.head]
        self.head = (self.head + 1) % self.cap
        self.size -= 1
        return item

    def peek(self):
        if self.size == 0:
            return None
        return self.data[self.head]

    def traverse(self) -> Iterator[Any]:
        for i in range(self.size):
            yield self.data[(self.head + i) % self.cap]

    def clear(self):
        # slots are left as they are; nothing past size is ever read
        self.head = self.tail = self.size = 0

    def is_full(self):
        return self.size == self.cap

    def is_empty(self):
        return self.size == 0

    def __iter__(self):
        return self.traverse()

    def __len__(self):
        return self.size


class PatientQueue(CircularQueue):
    """Admission queue: earliest admitted patient is discharged first."""
    def __init__(self, capacity: int = MAX_PATIENTS):
        super().__init__(capacity)

    def accepts(self, item: Patient) -> bool:
        return bool(item.id) and bool(item.name)

    def save(self, path: str) -> bool:
        return write_records(path, self.traverse())

    def load(self, path: str) -> int:
        return load_records(self, path, 3, Patient.from_lines, self.enqueue, 'patients')


class AmbulanceRotation(CircularQueue):
    """Duty roster; the head is the ambulance that goes out next."""
    def __init__(self, capacity: int = MAX_AMBULANCES):
        super().__init__(capacity)

    def accepts(self, item: Ambulance) -> bool:
        return bool(item.plate)

    def rotate_once(self):
        if self.size <= 1:
            return
        self.enqueue(self.dequeue())

    def save(self, path: str) -> bool:
        return write_records(path, self.traverse())

    def load(self, path: str) -> int:
        return load_records(self, path, 1, Ambulance.from_lines, self.enqueue, 'ambulances')


class SupplyStack:
    """Array-backed stack of supply batches, newest batch on top.

    Besides push/pop it can pull the newest batch of a given type out of the
    middle of the stack; the batches above it slide down one slot so the
    push order of everything else is unchanged.
    """
    # push/pop O(1), remove_most_recent O(n)
    def __init__(self, capacity: int = MAX_SUPPLIES):
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self.cap = capacity
        self.data: List[Optional[SupplyBatch]] = [None] * capacity
        self.top = -1  # -1 means empty

    def push(self, item: SupplyBatch) -> bool:
        if self.is_full():
            return False
        self.top += 1
        self.data[self.top] = item
        return True

    def pop(self) -> Optional[SupplyBatch]:
        if self.is_empty():
            return None
        item = self.data[self.top]
        self.top -= 1
        return item

    def peek(self) -> Optional[SupplyBatch]:
        if self.is_empty():
            return None
        return self.data[self.top]

    def distinct_types(self) -> List[str]:
        # bottom-up, first occurrence wins
        seen: List[str] = []
        for i in range(self.top + 1):
            if self.data[i].type not in seen:
                seen.append(self.data[i].type)
        return seen

    def remove_most_recent(self, supply_type: str) -> Optional[SupplyBatch]:
        index = -1
        for i in range(self.top, -1, -1):
            if self.data[i].type == supply_type:
                index = i
                break
        if index == -1:
            return None
        used = self.data[index]
        for i in range(index, self.top):
            self.data[i] = self.data[i + 1]
        self.top -= 1
        return used

    def traverse(self) -> Iterator[SupplyBatch]:
        for i in range(self.top, -1, -1):
            yield self.data[i]

    def bottom_up(self) -> Iterator[SupplyBatch]:
        for i in range(self.top + 1):
            yield self.data[i]

    def clear(self):
        self.top = -1

    def is_full(self):
        return self.top == self.cap - 1

    def is_empty(self):
        return self.top == -1

    def save(self, path: str) -> bool:
        return write_records(path, self.bottom_up())

    def load(self, path: str) -> int:
        return load_records(self, path, 3, SupplyBatch.from_lines, self.push, 'supplies')

    def __iter__(self):
        return self.traverse()

    def __len__(self):
        return self.top + 1


class EmergencyMaxHeap:
    """Binary max-heap on priority, stored 1-based (slot 0 unused)."""
    # push/pop_max = O(log n), peek_max = O(1)
    def __init__(self, capacity: int = MAX_EMERGENCIES):
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self.cap = capacity
        self.data: List[Optional[EmergencyCase]] = [None] * (capacity + 1)
        self.size = 0

    def _swap(self, i: int, j: int):
        self.data[i], self.data[j] = self.data[j], self.data[i]

    def _sift_up(self, i: int):
        # equal priorities stay where they are
        while i > 1 and self.data[i].priority > self.data[i // 2].priority:
            self._swap(i, i // 2)
            i //= 2

    def _sift_down(self, i: int):
        while True:
            left, right = 2 * i, 2 * i + 1
            largest = i
            if left <= self.size and self.data[left].priority > self.data[largest].priority:
                largest = left
            if right <= self.size and self.data[right].priority > self.data[largest].priority:
                largest = right
            if largest == i:
                return
            self._swap(i, largest)
            i = largest

    def push(self, case: EmergencyCase) -> bool:
        if self.is_full():
            logger.warning("Emergency queue is full; dropped case for %s", case.patient)
            return False
        self.size += 1
        self.data[self.size] = case
        self._sift_up(self.size)
        return True

    def peek_max(self) -> Optional[EmergencyCase]:
        if self.is_empty():
            return None
        return self.data[1]

    def pop_max(self) -> Optional[EmergencyCase]:
        if self.is_empty():
            return None
        top = self.data[1]
        self.data[1] = self.data[self.size]
        self.size -= 1
        self._sift_down(1)
        return top

    def traverse(self) -> Iterator[EmergencyCase]:
        """Heap array order, 1..size. Only the first item is the maximum."""
        for i in range(1, self.size + 1):
            yield self.data[i]

    def clear(self):
        self.size = 0

    def is_full(self):
        return self.size == self.cap

    def is_empty(self):
        return self.size == 0

    def save(self, path: str) -> bool:
        return write_records(path, self.traverse())

    def load(self, path: str) -> int:
        # rebuilt through push, so on-disk order does not matter
        return load_records(self, path, 3, EmergencyCase.from_lines, self.push, 'emergencies')

    def __iter__(self):
        return self.traverse()

    def __len__(self):
        return self.size


# ---------- Main System ----------
class HospitalCareSystem:
    """Owns the four containers; every change is written straight to disk."""
    def __init__(self, data_dir: str = '.'):
        self.data_dir = data_dir
        self.paths: Dict[str, str] = {
            key: os.path.join(data_dir, name) for key, name in DATA_FILES.items()
        }
        self.patients = PatientQueue(MAX_PATIENTS)
        self.supplies = SupplyStack(MAX_SUPPLIES)
        self.emergencies = EmergencyMaxHeap(MAX_EMERGENCIES)
        self.ambulances = AmbulanceRotation(MAX_AMBULANCES)

    def load_all(self):
        self.patients.load(self.paths['patients'])
        self.supplies.load(self.paths['supplies'])
        self.emergencies.load(self.paths['emergencies'])
        self.ambulances.load(self.paths['ambulances'])

    # Patient admission (queue)
    def admit_patient(self, pid: str, name: str, condition: str) -> Optional[Patient]:
        p = Patient(pid, name, condition)
        if not self.patients.enqueue(p):
            logger.warning("Patient %r not admitted (queue full or missing ID/name)", p.id)
            return None
        self.patients.save(self.paths['patients'])
        return p

    def discharge_patient(self) -> Optional[Patient]:
        p = self.patients.dequeue()
        if p:
            self.patients.save(self.paths['patients'])
        return p

    # Supplies (stack)
    def add_supply(self, supply_type: str, quantity: int, batch: str) -> Optional[SupplyBatch]:
        s = SupplyBatch(supply_type, quantity, batch)
        if not self.supplies.push(s):
            logger.warning("Supply store is full; batch %r not recorded", s.batch)
            return None
        self.supplies.save(self.paths['supplies'])
        return s

    def use_supply(self, supply_type: str) -> Optional[SupplyBatch]:
        used = self.supplies.remove_most_recent(supply_type)
        if used:
            self.supplies.save(self.paths['supplies'])
        return used

    # Emergencies (max-heap)
    def log_emergency(self, patient: str, emergency_type: str, priority: int) -> Optional[EmergencyCase]:
        e = EmergencyCase(patient, emergency_type, priority)
        if not self.emergencies.push(e):
            return None
        self.emergencies.save(self.paths['emergencies'])
        return e

    def process_most_critical(self) -> Optional[EmergencyCase]:
        e = self.emergencies.pop_max()
        if e:
            self.emergencies.save(self.paths['emergencies'])
        return e

    # Ambulances (circular rotation)
    def register_ambulance(self, plate: str) -> Optional[Ambulance]:
        a = Ambulance(plate)
        if not self.ambulances.enqueue(a):
            logger.warning("Ambulance %r not registered (roster full or empty plate)", a.plate)
            return None
        self.ambulances.save(self.paths['ambulances'])
        return a

    def rotate_shift(self) -> Optional[Ambulance]:
        if self.ambulances.is_empty():
            return None
        self.ambulances.rotate_once()
        self.ambulances.save(self.paths['ambulances'])
        return self.ambulances.peek()

    def dispatch_ambulance(self) -> Optional[Ambulance]:
        a = self.ambulances.dequeue()
        if a:
            self.ambulances.save(self.paths['ambulances'])
        return a

    # Reports
    def report_counts(self) -> Dict[str, int]:
        return {
            "patients": len(self.patients),
            "supplies": len(self.supplies),
            "emergencies": len(self.emergencies),
            "ambulances": len(self.ambulances),
        }
