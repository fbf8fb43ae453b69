"""CLI commands for Flask application."""

import click
from flask.cli import with_appcontext


@click.group()
def quests():
    """Quest maintenance commands."""
    pass


@quests.command()
@with_appcontext
def seed():
    """Seed default quests for users without any, and add missing achievements."""
    from trainingapp.models import User
    from trainingapp.services import ProgressStore
    from trainingapp.utils import utcnow

    seeded = added = 0
    for user in User.query.order_by(User.id).all():
        store = ProgressStore(user.id)
        with store.transaction("seed_quests"):
            if store.seed_quests_if_empty(utcnow()):
                seeded += 1
            added += store.sync_achievements()

    click.echo(f"Seeded quests for {seeded} user(s)")
    click.echo(f"Added {added} achievement(s)")


@quests.command()
@with_appcontext
def recompute():
    """Run a quest recompute pass for every user."""
    from trainingapp.models import User
    from trainingapp.services import ProgressionSession

    completed = 0
    for user in User.query.order_by(User.id).all():
        newly_completed = ProgressionSession(user.id).refresh_quests()
        for quest in newly_completed:
            click.echo(f"  {user.name}: completed '{quest.title}'")
        completed += len(newly_completed)

    click.echo(f"Done! {completed} quest(s) completed")


@quests.command()
@click.option("--user-id", type=int, required=True, help="User to reset")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@with_appcontext
def reset(user_id, yes):
    """Wipe a user's character, workouts and quests, then re-seed quests."""
    from trainingapp import db
    from trainingapp.models import User
    from trainingapp.services import ProgressionSession

    user = db.session.get(User, user_id)
    if not user:
        click.echo(f"Error: user {user_id} not found")
        raise SystemExit(1)

    if not yes:
        click.confirm(f"Reset all progression for {user.name}?", abort=True)

    profile = ProgressionSession(user.id).reset()
    click.echo(f"Reset {user.name}: level {profile.level}, {profile.title}")
