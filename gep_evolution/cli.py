"""
gep_evolution/cli.py - Command-line interface
"""
import time

import click
import numpy as np

from .chromosome import ChromosomeError
from .domains import arithmetic
from .engine import EvolutionConfig, Evolver
from .expression import EvaluationError
from .fitness import Fitness
from .genome import GenomeError
from .log import configure_logging
from .sampling import SAMPLERS

TARGETS = {
    'square': lambda a: a * a,
    'cubic': lambda a: a * a * a - a,
    'quartic': lambda a: a ** 4 + a ** 3 + a ** 2 + a,
    'sin': np.sin,
}


@click.group()
def cli():
    """GEP Evolution - Gene Expression Programming"""
    pass


@cli.command()
@click.option('--target', '-t', type=click.Choice(sorted(TARGETS)), default='square',
              help='Function of a to regress')
@click.option('--generations', '-g', default=100, help='Maximum number of generations')
@click.option('--population', '-p', default=75, help='Population size')
@click.option('--head-length', default=8, help='Gene head length')
@click.option('--genes', default=1, help='Genes per chromosome')
@click.option('--sampler', type=click.Choice(sorted(SAMPLERS)), default='roulette',
              help='Selection sampler')
@click.option('--mutation-rate', default=0.4, help='Mutation probability (0.0-1.0)')
@click.option('--crossover-rate', default=0.45, help='One/two point recombination probability, split 2:1')
@click.option('--points', default=10, help='Number of test points in [-5, 5)')
@click.option('--tolerance', default=0.01, help='Stop when within this of the ideal fitness')
@click.option('--seed', type=int, default=None, help='Random seed')
@click.option('--log-file', type=click.Path(dir_okay=False), default=None, help='Write debug log here')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def evolve(target, generations, population, head_length, genes, sampler, mutation_rate,
           crossover_rate, points, tolerance, seed, log_file, verbose):
    """Evolve an arithmetic expression matching a target function"""
    configure_logging("INFO" if verbose else "WARNING", log_file)

    config = EvolutionConfig(
        population_size=population,
        gene_count=genes,
        head_length=head_length,
        p_mutate=mutation_rate,
        p_one_point=crossover_rate * 2 / 3,
        p_two_point=crossover_rate / 3,
        p_gene_recombination=0.1 if genes > 1 else 0.0,
        p_gene_transposition=0.1 if genes > 1 else 0.0,
        sampler=sampler,
        seed=seed,
        max_generations=generations,
    )

    genome = arithmetic.arithmetic_genome(['a'], head_length)
    xs = np.arange(points, dtype=float) * (10.0 / points) - 5.0
    cases = [{'a': x, 'expected': float(TARGETS[target](x))} for x in xs]
    fitness = Fitness(cases, max_fitness=100.0,
                      linker=arithmetic.sum_linker if genes > 1 else None)
    config.target_fitness = fitness.ideal - tolerance

    click.echo(f"Starting evolution: target {target}, {generations} generations, "
               f"population {population}")
    click.echo(f"Genome: head {genome.head_length}, tail {genome.tail_length}, "
               f"{genes} gene(s)")

    start_time = time.time()
    evolver = Evolver(config, genome, arithmetic.decode, fitness)
    result = evolver.run()
    total_time = time.time() - start_time

    status = "converged" if result.converged else "stopped"
    click.echo(f"\nEvolution {status} after {result.generations} generations "
               f"in {total_time:.1f}s")
    click.echo(f"Best fitness: {result.best_fitness:.4f} (ideal {fitness.ideal:.1f})")
    click.echo(f"Chromosome: {result.best.chromosome}")
    for i, root in enumerate(result.best.express()):
        click.echo(f"  gene {i}: {root}")


@cli.command()
@click.argument('chromosome')
@click.option('--terminals', default='a', help='Terminal symbols, one character each')
@click.option('--functions', default='+-*/', help='Function symbols, one character each')
@click.option('--head-length', type=int, required=True, help='Gene head length')
def express(chromosome, terminals, functions, head_length):
    """Decode an arithmetic chromosome and print its expressions"""
    try:
        genome = arithmetic.arithmetic_genome(list(terminals), head_length, list(functions))
    except (GenomeError, ValueError) as e:
        raise click.BadParameter(str(e))

    if not genome.is_valid(chromosome):
        raise click.BadParameter(
            f"not a valid chromosome for head {genome.head_length} / "
            f"tail {genome.tail_length}", param_hint='CHROMOSOME')

    try:
        expressions = arithmetic.express_chromosome(chromosome, genome)
    except (ChromosomeError, EvaluationError) as e:
        raise click.ClickException(str(e))

    for i, expr in enumerate(expressions):
        click.echo(f"gene {i}: {expr}")


if __name__ == '__main__':
    cli()
