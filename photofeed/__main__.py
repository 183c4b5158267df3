from photofeed.main import run

run()
