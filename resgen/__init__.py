"""resgen -- strongly typed Swift accessors for the resources of an app target.

Quick usage::

    from resgen.config import Config
    from resgen.generators import Resources
    from resgen.pipeline import Pipeline

    resources = Resources.load(Path("resources.json"))
    result = await Pipeline(Config(output_path=Path("R.generated.swift"))).run(resources)
"""

__version__ = "0.1.0"
