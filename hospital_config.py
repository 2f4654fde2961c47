# hospital_config.py

# 1. CONTAINER CAPACITIES
MAX_PATIENTS = 100      # admission queue
MAX_SUPPLIES = 100      # supply stack
MAX_EMERGENCIES = 100   # emergency max-heap
MAX_AMBULANCES = 20     # ambulance rotation

# 2. DATA FILES (one per container, relative to the data directory)
DATA_FILES = {
    'patients': 'patients.txt',
    'supplies': 'supplies.txt',
    'emergencies': 'emergencies.txt',
    'ambulances': 'ambulances.txt',
}

# 3. FIELD LIMITS (UTF-8 bytes kept per text field)
FIELD_LIMITS = {
    'patient_id': 15,
    'patient_name': 49,
    'condition': 29,
    'supply_type': 29,
    'batch': 19,
    'emergency_patient': 49,
    'emergency_type': 39,
    'plate': 15,
}

# 4. EMERGENCY PRIORITY RANGE (inclusive, higher = more critical)
PRIORITY_MIN = 0
PRIORITY_MAX = 100

# 5. CONSOLE
LINE_WIDTH = 60
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'
