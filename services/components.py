"""Small layout helpers shared by the pages."""
import dash_mantine_components as dmc


def stat_card(title: str, value: str, span: int = 3):
    return dmc.GridCol(
        dmc.Paper(
            dmc.Stack([
                dmc.Text(title, size='sm', c='dimmed'),
                dmc.Text(value, size='xl', fw=600),
            ], gap=4),
            p='md',
            radius='md',
            withBorder=True,
        ),
        span=span,
    )


def loading_text(message: str):
    return dmc.Group(
        [dmc.Loader(size='sm'), dmc.Text(message, c='dimmed')],
        gap='sm',
        mt='md',
    )


def error_alert(message: str):
    return dmc.Alert(message, color='red', variant='light', mt='md')


def section(children, **kwargs):
    return dmc.Paper(children, p='md', radius='md', withBorder=True, **kwargs)
