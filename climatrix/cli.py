"""
Management commands, run through ``flask``:

    flask --app app seed
    flask --app app make-admin admin@climatrix.com
    flask --app app expire-alerts
"""

import click
from flask.cli import with_appcontext

from climatrix.extensions import cache, db
from climatrix.models import User


@click.command('seed')
@click.option('--hours', default=24, show_default=True, help='Hours of readings per city.')
@with_appcontext
def seed_command(hours):
    """Replace all data with the demo data set."""
    from climatrix.services.seed import DEMO_PASSWORD, seed_database

    counts = seed_database(hours=hours)
    cache.delete_pattern('*')

    for name, count in counts.items():
        click.echo(f'{name}: {count}')
    click.echo(f'Demo accounts use the password {DEMO_PASSWORD!r}')


@click.command('make-admin')
@click.argument('email')
@with_appcontext
def make_admin_command(email):
    """Give an existing user the ADMIN role."""
    user = User.query.filter_by(email=email.lower()).first()
    if not user:
        raise click.ClickException(f'No user with email {email}')

    if user.role == 'ADMIN':
        click.echo(f'{user.username} is already an admin')
        return

    user.role = 'ADMIN'
    db.session.commit()
    click.echo(f'{user.username} promoted to admin')


@click.command('expire-alerts')
@with_appcontext
def expire_alerts_command():
    """Deactivate alerts whose end time has passed."""
    from climatrix.alerts.services import expire_alerts

    count = expire_alerts()
    click.echo(f'Deactivated {count} expired alert(s)')


def register_commands(app):
    app.cli.add_command(seed_command)
    app.cli.add_command(make_admin_command)
    app.cli.add_command(expire_alerts_command)
