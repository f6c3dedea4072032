from blob_editor.cli import run

run()
