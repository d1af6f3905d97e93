from tvmaze_server.main import run

run()
