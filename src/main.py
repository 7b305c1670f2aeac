import os
import sys

from engine.scenario_runner import ScenarioRunner
from segments.errors import SegmentError
from shared.logger import configure_segment_logger, get_segment_log_path
from shared.utils import get_nested
# =============================================================================
# MAIN
# =============================================================================

USAGE = "Uso: python main.py <scenario.yml> [output.txt] [--plot output.pdf] [--log-dir DIR]"


def parse_args(argv):
    """
    Estrae argomenti posizionali e opzioni da argv (senza il nome script).

    Returns:
        dict con 'yaml_file', 'output_file', 'plot_file', 'log_dir'

    Raises:
        ValueError: argomenti mancanti o opzione senza valore
    """
    options = {'plot_file': None, 'log_dir': None}
    positional = []

    args = list(argv)
    while args:
        arg = args.pop(0)
        if arg in ('--plot', '--log-dir'):
            if not args:
                raise ValueError(f"L'opzione {arg} richiede un valore")
            key = 'plot_file' if arg == '--plot' else 'log_dir'
            options[key] = args.pop(0)
        else:
            positional.append(arg)

    if not positional:
        raise ValueError("Manca il file scenario")

    options['yaml_file'] = positional[0]
    options['output_file'] = positional[1] if len(positional) > 1 else 'segments.txt'
    return options


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv

    try:
        args = parse_args(argv)
    except ValueError as e:
        print(f"✗ {e}")
        print(USAGE)
        return 1

    yaml_file = args['yaml_file']

    try:
        runner = ScenarioRunner(yaml_file)

        print(f"Caricamento {yaml_file}...")
        runner.load_yaml()

        scenario_name = os.path.splitext(os.path.basename(yaml_file))[0]
        configure_segment_logger(
            file_enabled=args['log_dir'] is not None,
            log_dir=args['log_dir'] or './logs',
            scenario_name=scenario_name,
            log_operations=get_nested(runner.data, 'settings.log_operations', True),
            validation_mode=get_nested(runner.data, 'settings.validation_mode', 'strict')
        )

        print("Esecuzione operazioni...")
        runner.create_stores()

        print("Scrittura report...")
        runner.write_results(args['output_file'])

        if args['plot_file']:
            # Import qui: matplotlib serve solo con --plot
            from rendering.segment_visualizer import SegmentVisualizer
            SegmentVisualizer(runner.tracks).export_pdf(args['plot_file'])

        log_path = get_segment_log_path()
        if log_path:
            print(f"📝 Log operazioni: {log_path}")

        if runner.failed_tracks:
            print(f"\n✗ {len(runner.failed_tracks)} store non corrispondono a 'expect'")
            return 1

        print("\n✓ Esecuzione completata!")
        return 0

    except FileNotFoundError:
        print(f"✗ Errore: file '{yaml_file}' non trovato")
        return 1
    except SegmentError as e:
        print(f"✗ Operazione rifiutata: {type(e).__name__}: {e}")
        return 1
    except ValueError as e:
        print(f"✗ Errore: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
