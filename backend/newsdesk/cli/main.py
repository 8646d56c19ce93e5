import click

from newsdesk.cli.admin import create_admin, init_db_command


@click.group()
def cli():
    """NewsDesk CLI tools"""
    pass


cli.add_command(init_db_command)
cli.add_command(create_admin)


if __name__ == "__main__":
    cli()
