"""Commands the shell runs itself: echo, cd, pwd, export, unset, env and exit."""