# type: ignore
from invoke import task


@task
def venv(ctx):
    """Create .venv with dohome and its test and dev extras."""
    ctx.run("uv venv")
    ctx.run('uv pip install -e ".[test,dev]"')


@task
def lint(ctx):
    """Ruff and mypy over the package and its tests."""
    ctx.run("ruff check src tests", pty=True)
    ctx.run("ruff format --check src tests", pty=True)
    ctx.run("mypy src", pty=True)


@task
def test(ctx):
    """Run tests with coverage of the dohome package."""
    ctx.run("pytest --cov=dohome --cov-report=term-missing", pty=True)


@task(help={"timeout": "Seconds to listen for devices"})
def trace(ctx, timeout=5):
    """Scan the local network with every datagram logged."""
    ctx.run(
        f"dohome scan --timeout {timeout}",
        env={"LOGLEVEL": "DEBUG", "DOHOME_TRACE_DATAGRAMS": "1"},
        pty=True,
    )


@task
def build_package(ctx):
    """Build sdist and wheel into dist/."""
    ctx.run("rm -rf dist")
    ctx.run("uv build")
