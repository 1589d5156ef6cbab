from dearrow_bot.main import run_bot

run_bot()
