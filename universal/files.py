import os
import json


def char_replace(instr):
	for char in ['(', ')', '[', ']', ',', '/', "'", '"', ":", ";", "&", ".", "#", "*", "?", "<", ">", "|", "\\"]:
		instr = instr.replace(char, '')
	instr = instr.strip()
	instr = instr.replace(' ', '_')
	return instr.lower()


def makedirs(output, zone=None):
	if not zone:
		item_dir = os.path.abspath(output + "/unknown_zone")
	else:
		item_dir = os.path.abspath(output + "/" + char_replace(zone))
	if not os.path.exists(item_dir):
		os.makedirs(item_dir)
	return item_dir


def create_item_filename(jsondir, struct):
	title = jsondir + "/" + char_replace(struct['name']) + ".json"
	return os.path.abspath(title)


def write_item(jsondir, struct):
	print("%s: %s" % (struct.get('zone') or 'unknown zone', struct['name']))
	filename = create_item_filename(jsondir, struct)
	with open(filename, 'w') as fp:
		json.dump(struct, fp, indent=4)
	return filename
