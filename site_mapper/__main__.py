from site_mapper.cli import cli

cli(prog_name="site-mapper")
