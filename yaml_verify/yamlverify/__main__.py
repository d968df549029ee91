from yamlverify.cli import app

app(prog_name="yaml-verify")
