from pastebin.main import run

run()
