"""Example usage of the pgmflow package.

This example demonstrates the core features of the pgmflow package including:
- Building the Student Bayesian network and evaluating joint probabilities
- Exact and approximate conditional inference
- Learning CPDs back from forward-sampled data
"""

from pgmflow import (
    Assignment,
    Binomial,
    DirectedModelBuilder,
    Factor,
    ForwardSampler,
    GibbsSampler,
    ImportanceSamplingEngine,
    McmcEngine,
    ModelMLEstimator,
    Table,
    UndirectedModel,
    VariableEliminationEngine,
    all_assignments,
    binary,
    discrete,
)


def student_network():
    """Build the Student network with a three-valued Grade."""
    difficulty, intelligence = binary(), binary()
    grade, sat, letter = discrete(3), binary(), binary()

    cpd_g = Factor.cpd(
        grade,
        [intelligence, difficulty],
        [[[0.3, 0.4, 0.3], [0.05, 0.25, 0.7]],
         [[0.9, 0.08, 0.02], [0.5, 0.3, 0.2]]],
    )
    cpd_s = Factor.cpd(sat, [intelligence], [[0.95, 0.05], [0.2, 0.8]])
    cpd_l = Factor.cpd(letter, [grade], [[0.1, 0.9], [0.4, 0.6], [0.99, 0.01]])

    return (
        DirectedModelBuilder()
        .with_named_variable(difficulty, "D", [], Binomial(0.6))
        .with_named_variable(intelligence, "I", [], Binomial(0.7))
        .with_named_variable(grade, "G", [intelligence, difficulty], Table(cpd_g))
        .with_named_variable(sat, "S", [intelligence], Table(cpd_s))
        .with_named_variable(letter, "L", [grade], Table(cpd_l))
        .build()
    )


def representation_example(model):
    """Demonstrate joint probabilities and model conversion."""
    print("=" * 60)
    print("Representation Example")
    print("=" * 60)

    total = sum(model.probability(a) for a in all_assignments(model.variables()))
    print(f"\n1. Sum of P over all {len(all_assignments(model.variables()))} "
          f"assignments: {total:.6f}")

    names = {v: model.lookup_name(v) for v in model.variables()}
    assn = Assignment.from_dict({model.lookup_variable(n): 0 for n in "DIGSL"})
    print(f"2. P(D=0, I=0, G=0, S=0, L=0) = {model.probability(assn):.6f}")

    undirected = UndirectedModel.from_directed(model)
    print(f"3. Partition function of the bag-of-CPDs network: "
          f"{undirected.partition:.6f}")

    edges = [(names[u], names[v]) for u, v in model.to_networkx().edges()]
    print(f"4. Edges: {edges}")


def inference_example(model):
    """Demonstrate exact and approximate conditional inference."""
    print("\n" + "=" * 60)
    print("Inference Example")
    print("=" * 60)

    d, i, s, l = (model.lookup_variable(n) for n in "DISL")
    evidence = Assignment.from_dict({d: 0, s: 0, l: 1})
    target = Assignment.from_dict({i: 1})

    engines = {
        "Variable elimination": VariableEliminationEngine.for_directed(
            model, evidence
        ),
        "Importance sampling": ImportanceSamplingEngine(
            model, evidence, samples=5000, rng=0
        ),
        "MCMC (Gibbs)": McmcEngine(
            GibbsSampler.for_directed(model, evidence, rng=0),
            burnin=2000,
            samples=5000,
        ),
    }

    print("\nP(I=1 | D=0, S=0, L=1)")
    for label, engine in engines.items():
        result = engine.infer([i])
        print(f"   {label:<22}: {result.value(target):.4f}")


def estimation_example(model):
    """Demonstrate maximum-likelihood estimation from sampled data."""
    print("\n" + "=" * 60)
    print("Estimation Example")
    print("=" * 60)

    sampler = ForwardSampler(model, rng=42)
    data = [sampler.sample() for _ in range(10000)]
    learned = ModelMLEstimator(model).estimate(data)

    for var in model.topological_order():
        error = abs(learned.cpd(var).values - model.cpd(var).values).max()
        print(f"   {model.lookup_name(var)}: max abs error {error:.4f}")


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("pgmflow Package Examples")
    print("=" * 60)

    student = student_network()
    representation_example(student)
    inference_example(student)
    estimation_example(student)

    print("\n" + "=" * 60)
    print("Examples completed successfully!")
    print("=" * 60 + "\n")
