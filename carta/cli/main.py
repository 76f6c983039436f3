"""Main CLI application using Cyclopts."""

import cyclopts

from carta.cli.commands import db, server, users

app = cyclopts.App(
    name="carta",
    help="Carta Tech - administration CLI",
)

app.command(users.app, name="users")
app.command(db.app, name="db")
app.command(server.app, name="server")
