from rich.pretty import pprint

from cliflags import *
from cliflags.internals import begin, descend

app = Node("app", settings=("ColoredHelp", AppSettings.SubcommandRequiredElseHelp))
build = app.command("build", settings=(AppSettings.TrailingVarArg,))


if __name__ == '__main__':
    begin(app)
    descend(app, build)
    pprint(app)
    pprint(build)
