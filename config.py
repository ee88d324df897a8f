# config.py
import logging

# === Instance / output ===
INPUT = "instances/toy.ectt"
OUTPUT = "toy.sol"

# === Driver ===
SEED = None
POPULATION_SIZE = 8
GENERATIONS = 20
LOG_LEVEL = logging.INFO

# === Variation operators ===
ATTEMPTS_AFTER_FAIL = 100
# "drop": an exhausted mutation yields no offspring
# "parent": an exhausted mutation yields the unmodified parent
MUTATION_EXHAUSTED_POLICY = "drop"

# === Initial solution finder ===
RANKING_RANDOMNESS = 0.33
FINDER_MAX_TRIALS = 200

# === UD1 soft constraint weights ===
ROOM_CAPACITY_COST_FACTOR = 1
MIN_WORKING_DAYS_COST_FACTOR = 5
CURRICULUM_COMPACTNESS_COST_FACTOR = 2
ROOM_STABILITY_COST_FACTOR = 1
