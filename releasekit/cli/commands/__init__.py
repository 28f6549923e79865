"""
CLI command implementations, one module per subcommand exposing ``run(args)``.
"""
