from invoke import task
from pathlib import Path

# Get project root directory
PROJECT_ROOT = Path(__file__).parent.absolute()


def project_relative(path):
    """Convert a relative path to an absolute path relative to the project root."""
    return str(PROJECT_ROOT / path)


@task
def update(c):
    """Update all dependencies to their latest versions using poetry."""
    c.run("poetry update")


@task
def up(c):
    """Alias for update - update all dependencies to their latest versions."""
    update(c)


@task
def status(c):
    """Check git status of the repository."""
    c.run("git status")


@task
def st(c):
    """Alias for status - check git status of the repository."""
    status(c)


@task
def shell(c):
    """Start Django shell."""
    manage_py = project_relative("manage.py")
    c.run(f"python {manage_py} shell")


@task
def test(c, path=None):
    """Run the tests. Optionally specify a specific test path."""
    manage_py = project_relative("manage.py")
    settings = "--settings=golftour.test_settings"
    if path:
        c.run(f"python {manage_py} test {path} {settings}")
    else:
        c.run(f"python {manage_py} test {settings}")


@task
def simulate(c, output="simulated.json", seed=None):
    """Write a simulated tournament snapshot."""
    manage_py = project_relative("manage.py")
    seed_option = f" --seed {seed}" if seed is not None else ""
    c.run(f"python {manage_py} simulate_tournament {output}{seed_option}")


@task
def leaderboard(c, snapshot, group=None):
    """Print the leaderboard for a snapshot file."""
    manage_py = project_relative("manage.py")
    group_option = f" --group '{group}'" if group else ""
    c.run(f"python {manage_py} compute_leaderboard {snapshot}{group_option}")
