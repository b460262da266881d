from sprintcal.cli import app

app(prog_name="sprintcal")
