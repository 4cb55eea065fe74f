from mini_task_manager.main import run

run()
