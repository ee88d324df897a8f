# main.py
import argparse
import logging
import random
import sys

import config
from constraints import UD1Formulation, Evaluator
from crossover import CourseBasedCrossover
from feasible_solution_finder import FeasibleSolutionFinder
from model_parser import SpecificationParser
from mutation import CourseBasedMutation
from printer import PrettyTextPrinter
from room_assigner import GreedyRoomAssigner
from solution_converter import SolutionConverter
from variation import OperatorStats

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Curriculum-based course timetabling with course-based variation operators',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('input', nargs='?', default=config.INPUT, help='Instance file (.ctt / .ectt)')
    parser.add_argument('--output', default=config.OUTPUT, help='Where to write the best solution')
    parser.add_argument('--seed', type=int, default=config.SEED, help='Random seed')
    parser.add_argument('--population', type=int, default=config.POPULATION_SIZE)
    parser.add_argument('--generations', type=int, default=config.GENERATIONS)
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default=logging.getLevelName(config.LOG_LEVEL),
        help='Logging level'
    )
    return parser.parse_args(argv)


def setup_logging(log_level):
    logging.basicConfig(
        level=getattr(logging, log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)
    rng = random.Random(args.seed)

    # === Load specification ===
    parser = SpecificationParser()
    spec = parser.parse(args.input)
    if spec is None:
        logger.error("Could not load instance: %s", parser.get_error())
        return 1
    logger.info("Loaded %s: %d courses, %d rooms, %d curricula",
                spec.name, len(spec.courses), len(spec.rooms), len(spec.curricula))

    room_assigner = GreedyRoomAssigner(spec)
    formulation = UD1Formulation(spec)
    converter = SolutionConverter(spec)
    evaluator = Evaluator(formulation, converter)
    stats = OperatorStats()
    crossover = CourseBasedCrossover(spec, room_assigner, converter, stats)
    mutation = CourseBasedMutation(spec, room_assigner, converter, stats)

    def score(timetable):
        return formulation.hard_violations(timetable), formulation.penalty(timetable)

    # === Initial population ===
    finder = FeasibleSolutionFinder(spec, room_assigner)
    population = []
    for _ in range(args.population):
        timetable = finder.find(rng=rng)
        if timetable is None:
            logger.error("Failed to find an initial feasible solution: %s", finder.error)
            return 1
        population.append(timetable)

    # === Evolve ===
    for generation in range(args.generations):
        offspring = []
        for _ in range(max(1, len(population) // 2)):
            parent1, parent2 = rng.choice(population), rng.choice(population)
            for child in crossover.crossover(parent1, parent2, rng):
                offspring.extend(mutation.mutate(child, rng))
        population = sorted(population + offspring, key=score)[:args.population]
        hard, penalty = score(population[0])
        logger.info("Generation %d | best hard=%d penalty=%d | crossover degraded %.2f | mutation failed %.2f",
                    generation, hard, penalty,
                    stats.degraded_rate(crossover.name), stats.degraded_rate(mutation.name))

    best = population[0]
    for name, value in zip(formulation.objective_names, evaluator.evaluate(best)):
        print(f"{name}: {value}")
    print(PrettyTextPrinter(spec).print(best))

    converter.write(best, args.output)
    logger.info("Best solution written to %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
