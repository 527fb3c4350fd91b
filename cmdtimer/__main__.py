from cmdtimer.measure_cmd import cli

if __name__ == "__main__":
    cli()
